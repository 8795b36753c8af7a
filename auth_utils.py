import uuid
from functools import wraps
from flask import current_app, g, redirect, session, url_for

from storage_service import StorageService

def device_id():
    """Per-browser namespace id, kept in the signed session cookie."""
    if 'device_id' not in session:
        session['device_id'] = uuid.uuid4().hex
        session.permanent = True
    return session['device_id']

def get_storage():
    if 'storage' not in g:
        g.storage = StorageService(current_app.kv_store, device_id())
    return g.storage

def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = get_storage().get_current_user()
        if user is None:
            return redirect(url_for('auth.login'))
        g.user = user
        return fn(*args, **kwargs)
    return wrapper
