"""
Local disk storage for complaint attachments
"""

from flask import current_app
import os
import re
import time


class LocalStorageService:
    """
    Stores uploaded attachments in UPLOAD_FOLDER.
    Rows reference files by stored filename only.
    """

    @staticmethod
    def upload_folder():
        folder = os.path.abspath(current_app.config['UPLOAD_FOLDER'])
        os.makedirs(folder, exist_ok=True)
        return folder

    @staticmethod
    def allowed_file(filename):
        """Check if file extension is allowed"""
        return '.' in filename and \
               filename.rsplit('.', 1)[1].lower() in current_app.config['ALLOWED_EXTENSIONS']

    @staticmethod
    def sanitize_filename(filename):
        """Replace anything outside [A-Za-z0-9.] with an underscore"""
        return re.sub(r'[^a-zA-Z0-9.]', '_', filename)

    @staticmethod
    def save_file(file):
        """
        Save an uploaded file

        Args:
            file: FileStorage object from request.files

        Returns:
            Stored filename ("<epoch-ms>_<sanitized name>")
        """
        original = LocalStorageService.sanitize_filename(file.filename)
        filename = f"{int(time.time() * 1000)}_{original}"
        file.save(os.path.join(LocalStorageService.upload_folder(), filename))
        current_app.logger.info(f'Stored attachment {filename}')
        return filename

    @staticmethod
    def delete_file(filename):
        """Remove a stored file; returns True if something was deleted"""
        if not filename:
            return False

        file_path = LocalStorageService.file_path(filename)
        if file_path and os.path.isfile(file_path):
            os.remove(file_path)
            current_app.logger.info(f'Removed attachment {filename}')
            return True
        return False

    @staticmethod
    def file_path(filename):
        """Absolute path for a stored filename, or None if it escapes the folder"""
        folder = os.path.abspath(current_app.config['UPLOAD_FOLDER'])
        path = os.path.abspath(os.path.join(folder, filename))
        if os.path.dirname(path) != folder:
            return None
        return path

    @staticmethod
    def exists(filename):
        path = LocalStorageService.file_path(filename)
        return bool(path) and os.path.isfile(path)
