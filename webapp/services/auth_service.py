"""
Authentication Service

Handles user registration, login/logout, password changes and the premium
subscription flag on top of UserDatabase.

Business failures are returned as result dictionaries, never raised:

    {'success': False, 'message': 'Senha incorreta.', 'error': 'bad_credentials'}

Unexpected storage errors propagate to the caller.
"""

import logging

from config import settings
from config.database import DuplicateEmailError
from utils.security import hash_password, verify_password
from utils.timestamps import new_user_id, to_iso, utc_now

logger = logging.getLogger(__name__)

# Error codes
DUPLICATE_EMAIL = 'duplicate_email'
NOT_FOUND = 'not_found'
BAD_CREDENTIALS = 'bad_credentials'
ALREADY_SUBSCRIBED = 'already_subscribed'
NOT_SUBSCRIBED = 'not_subscribed'
PERSIST_FAILED = 'persist_failed'

MESSAGES = {
    'registered': 'Cadastro realizado com sucesso!',
    'logged_in': 'Login realizado com sucesso!',
    'password_changed': 'Senha alterada com sucesso!',
    'subscribed': 'Assinatura ativada com sucesso!',
    'cancelled': 'Assinatura cancelada com sucesso.',
    'duplicate_email': 'Este email já está cadastrado.',
    'email_not_found': 'Email não encontrado.',
    'user_not_found': 'Usuário não encontrado.',
    'wrong_password': 'Senha incorreta.',
    'wrong_current_password': 'Senha atual incorreta.',
    'already_subscribed': 'Você já possui uma assinatura ativa.',
    'not_subscribed': 'Você não possui uma assinatura ativa.',
    'password_not_saved': 'Erro ao atualizar senha.',
    'subscribe_not_saved': 'Erro ao ativar assinatura.',
    'cancel_not_saved': 'Erro ao cancelar assinatura.',
}


def make_result(success, message, error=None, user=None):
    """Build a result dictionary; 'user' is only included when given."""
    result = {'success': success, 'message': message, 'error': error}
    if user is not None:
        result['user'] = user
    return result


def session_view(user):
    """
    Build the read-only session view of a stored user record.

    The password hash is stripped and timestamps are rendered as ISO strings.
    """
    return {
        'user_id': user['user_id'],
        'name': user['name'],
        'email': user['email'],
        'is_premium': bool(user['is_premium']),
        'subscription_date': to_iso(user['subscription_date']),
        'created_at': to_iso(user['created_at']),
    }


class AuthService:
    """
    Account, session and subscription façade.

    Construct once at application start and pass it to callers. The default
    session key models a single browser; web callers pass one per client.
    """

    def __init__(self, db, session_key=None):
        self.db = db
        self.session_key = session_key or settings.SESSION_KEY

    def register(self, name, email, password):
        """
        Register a new user. Does not log the user in.

        Args:
            name (str): Display name
            email (str): Email address (unique, case-sensitive)
            password (str): Plain-text password

        Returns:
            dict: Result with success flag and message
        """
        if self.db.find_user_by_email(email):
            logger.warning(f"Registration rejected for {email}: email already registered")
            return make_result(False, MESSAGES['duplicate_email'], DUPLICATE_EMAIL)

        user = {
            'user_id': new_user_id(),
            'name': name,
            'email': email,
            'password_hash': hash_password(password),
            'is_premium': False,
            'subscription_date': None,
            'created_at': utc_now(),
        }

        try:
            self.db.save_user(user)
        except DuplicateEmailError:
            return make_result(False, MESSAGES['duplicate_email'], DUPLICATE_EMAIL)

        return make_result(True, MESSAGES['registered'])

    def login(self, email, password, session_key=None):
        """
        Log a user in and start a session.

        Args:
            email (str): Email address
            password (str): Plain-text password
            session_key (str, optional): Session to write, defaults to the service key

        Returns:
            dict: Result with success flag, message and, on success, the session view
        """
        user = self.db.find_user_by_email(email)

        if not user:
            logger.warning(f"Login failed for {email}: email not found")
            return make_result(False, MESSAGES['email_not_found'], NOT_FOUND)

        if not verify_password(user['password_hash'], password):
            logger.warning(f"Login failed for {email}: wrong password")
            return make_result(False, MESSAGES['wrong_password'], BAD_CREDENTIALS)

        self.db.set_session(session_key or self.session_key, email)
        logger.info(f"User logged in: {email}")
        return make_result(True, MESSAGES['logged_in'], user=session_view(user))

    def update_password(self, email, current_password, new_password):
        """
        Change a user's password after checking the current one.

        Returns:
            dict: Result with success flag and message
        """
        user = self.db.find_user_by_email(email)

        if not user:
            return make_result(False, MESSAGES['user_not_found'], NOT_FOUND)

        if not verify_password(user['password_hash'], current_password):
            return make_result(False, MESSAGES['wrong_current_password'], BAD_CREDENTIALS)

        if not self.db.update_user(email, password_hash=hash_password(new_password)):
            logger.error(f"Password update for {email} matched no record")
            return make_result(False, MESSAGES['password_not_saved'], PERSIST_FAILED)

        logger.info(f"Password changed for {email}")
        return make_result(True, MESSAGES['password_changed'])

    def logout(self, session_key=None):
        """
        End the current session.

        Returns:
            bool: True if a session existed
        """
        return self.db.delete_session(session_key or self.session_key)

    def get_current_user(self, session_key=None):
        """
        Get the logged-in user's session view.

        Returns:
            dict or None: Session view, None when anonymous
        """
        email = self.db.get_session_email(session_key or self.session_key)
        if email is None:
            return None

        user = self.db.find_user_by_email(email)
        return session_view(user) if user else None

    def is_premium_user(self, session_key=None):
        """Check whether the logged-in user has an active subscription."""
        user = self.get_current_user(session_key)
        return user['is_premium'] is True if user else False

    def subscribe(self, email):
        """
        Activate the premium subscription for a user.

        Returns:
            dict: Result with success flag and message
        """
        user = self.db.find_user_by_email(email)

        if not user:
            return make_result(False, MESSAGES['user_not_found'], NOT_FOUND)

        if user['is_premium']:
            return make_result(False, MESSAGES['already_subscribed'], ALREADY_SUBSCRIBED)

        if not self.db.update_user(email, is_premium=True, subscription_date=utc_now()):
            logger.error(f"Subscription for {email} matched no record")
            return make_result(False, MESSAGES['subscribe_not_saved'], PERSIST_FAILED)

        logger.info(f"Premium subscription activated for {email}")
        return make_result(True, MESSAGES['subscribed'])

    def cancel_subscription(self, email):
        """
        Cancel the premium subscription for a user.

        Returns:
            dict: Result with success flag and message
        """
        user = self.db.find_user_by_email(email)

        if not user:
            return make_result(False, MESSAGES['user_not_found'], NOT_FOUND)

        if not user['is_premium']:
            return make_result(False, MESSAGES['not_subscribed'], NOT_SUBSCRIBED)

        if not self.db.update_user(email, is_premium=False, subscription_date=None):
            logger.error(f"Subscription cancel for {email} matched no record")
            return make_result(False, MESSAGES['cancel_not_saved'], PERSIST_FAILED)

        logger.info(f"Premium subscription cancelled for {email}")
        return make_result(True, MESSAGES['cancelled'])
