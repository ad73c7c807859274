"""
System configuration key/value store
"""

from flask import current_app
from extensions import db


class SystemConfig(db.Model):
    __tablename__ = 'system_config'

    id = db.Column(db.Integer, primary_key=True)
    config_key = db.Column(db.String(100), unique=True, nullable=False, index=True)
    config_value = db.Column(db.Text)

    @staticmethod
    def as_dict():
        """Stored settings layered over the configured defaults"""
        settings = dict(current_app.config.get('DEFAULT_SYSTEM_CONFIG', {}))
        for row in SystemConfig.query.all():
            settings[row.config_key] = row.config_value
        return settings

    @staticmethod
    def upsert(key, value):
        """Insert or update a single setting (caller commits)"""
        row = SystemConfig.query.filter_by(config_key=key).first()
        if row is None:
            row = SystemConfig(config_key=key, config_value=value)
            db.session.add(row)
        else:
            row.config_value = value
        return row

    def __repr__(self):
        return f'<SystemConfig {self.config_key}={self.config_value}>'
