from config import config, mail_suppressed


def test_mail_is_suppressed_without_smtp_credentials():
    assert mail_suppressed({}) is True
    assert mail_suppressed({'MAIL_SERVER': 'smtp.gmail.com'}) is True


def test_mail_is_sent_once_credentials_are_configured():
    assert mail_suppressed({'MAIL_USERNAME': 'desk@example.com'}) is False


def test_explicit_suppress_flag_wins():
    assert mail_suppressed({'MAIL_USERNAME': 'desk@example.com', 'MAIL_SUPPRESS_SEND': 'True'}) is True
    assert mail_suppressed({'MAIL_SUPPRESS_SEND': 'False'}) is False


def test_testing_config_never_sends_mail():
    assert config['testing'].MAIL_SUPPRESS_SEND is True
