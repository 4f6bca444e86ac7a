"""
Household Authentication

Mise has one shared household password. A successful login marks the
Flask session as authorized; every API route except login checks it.

Generate a hash for HOUSEHOLD_PASSWORD_HASH with:
    python -m utils.auth <password>
"""

import sys
from functools import wraps

from flask import current_app, jsonify, session
from werkzeug.security import check_password_hash, generate_password_hash

SESSION_KEY = 'household_authorized'


def hash_password(password):
    return generate_password_hash(password)


def check_household_password(password):
    """True if password matches the configured household hash."""
    hashed = current_app.config.get('HOUSEHOLD_PASSWORD_HASH')
    if not isinstance(password, str) or not password or not hashed:
        return False
    return check_password_hash(hashed, password)


def login_household():
    session.clear()
    session[SESSION_KEY] = True
    session.permanent = True


def logout_household():
    session.clear()


def is_authorized():
    return bool(session.get(SESSION_KEY))


def login_required(view):
    """Reject the request with 401 unless the household is logged in."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not is_authorized():
            return jsonify({'error': 'Unauthorized'}), 401
        return view(*args, **kwargs)
    return wrapped


if __name__ == '__main__':
    if len(sys.argv) != 2:
        print("Usage: python -m utils.auth <password>")
        sys.exit(1)
    print(hash_password(sys.argv[1]))
