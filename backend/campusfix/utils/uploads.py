from __future__ import annotations
import os
import time
from typing import Optional
from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename
from campusfix.errors import ValidationError

URL_PREFIX = '/uploads'


def allowed_file(filename: str) -> bool:
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in current_app.config['ALLOWED_EXTENSIONS']


def save_image(file: Optional[FileStorage]) -> Optional[str]:
    """Store an uploaded complaint photo and return its public path, or None when absent."""
    if file is None or not file.filename:
        return None
    if not allowed_file(file.filename):
        raise ValidationError(description='image type not allowed')
    safe = secure_filename(file.filename)
    if not safe:
        raise ValidationError(description='image filename invalid')
    # millisecond prefix keeps repeated uploads of the same name apart
    filename = f"{int(time.time() * 1000)}-{safe}"
    file.save(os.path.join(current_app.config['UPLOAD_FOLDER'], filename))
    current_app.logger.info('Stored upload %s', filename)
    return f"{URL_PREFIX}/{filename}"
