"""
Flask Application Factory

Creates and configures the Flask application instance. Services are built
once here and shared by every request.
"""

import uuid
import logging
from datetime import datetime

from flask import Flask, request, redirect, url_for, session, jsonify, current_app

from config import settings
from config.database import UserDatabase
from webapp.services import auth_service as auth
from webapp.services.auth_service import AuthService
from webapp.services.geocoding_service import search_places
from webapp.services.itinerary_service import ItineraryPlanner

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = (
    "Você precisa fazer login para criar roteiros.\n\n"
    "Crie sua conta e assine o Plano Premium para ter acesso ilimitado!"
)
PREMIUM_REQUIRED_MESSAGE = (
    "Apenas assinantes Premium podem criar roteiros!\n\n"
    "Assine agora por apenas R$ 19,90/mês e tenha acesso ilimitado."
)
NOT_LOGGED_IN_MESSAGE = "Faça login para continuar."
INVALID_BODY_MESSAGE = "Requisição inválida: envie um objeto JSON."

ERROR_STATUS = {
    auth.DUPLICATE_EMAIL: 409,
    auth.NOT_FOUND: 404,
    auth.BAD_CREDENTIALS: 401,
    auth.ALREADY_SUBSCRIBED: 409,
    auth.NOT_SUBSCRIBED: 409,
    auth.PERSIST_FAILED: 500,
}


def get_auth_service():
    return current_app.extensions['ecotrip.auth']


def get_planner():
    return current_app.extensions['ecotrip.planner']


def result_response(result, success_status=200):
    """Turn an AuthService result into a JSON response with a matching status."""
    if result['success']:
        return jsonify(result), success_status
    return jsonify(result), ERROR_STATUS.get(result['error'], 400)


def error_response(message, status):
    return jsonify({'success': False, 'message': message, 'error': None}), status


def request_body():
    """
    Get the JSON request body as a dict.

    Returns:
        dict or None: Body (empty when absent or unparseable), None when it is not a JSON object
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def missing_fields(data, fields):
    """
    Get the required fields that are absent, blank or not strings.

    Args:
        data (dict): Request JSON body
        fields (tuple): Required field names

    Returns:
        list: Missing field names
    """
    return [field for field in fields if not isinstance(data.get(field), str) or not data[field].strip()]


def current_user():
    """Get the session view for this browser, or None when anonymous."""
    sid = session.get('sid')
    if not sid:
        return None
    return get_auth_service().get_current_user(sid)


def create_app(config=None, auth_service=None, planner=None):
    """
    Create and configure the Flask application.

    Args:
        config (dict, optional): Flask config overrides (e.g. DATABASE_URL, TESTING)
        auth_service (AuthService, optional): Prebuilt account service
        planner (ItineraryPlanner, optional): Prebuilt itinerary planner
    """
    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY
    app.config['DATABASE_URL'] = settings.DATABASE_URL
    if config:
        app.config.update(config)

    if auth_service is None:
        db = UserDatabase(app.config['DATABASE_URL'])
        db.init_database()
        auth_service = AuthService(db)
    app.extensions['ecotrip.auth'] = auth_service
    app.extensions['ecotrip.planner'] = planner or ItineraryPlanner()

    @app.route('/')
    def home():
        """Service information."""
        return jsonify({
            'service': 'EcoTrip Planner',
            'themes': get_planner().themes,
            'logged_in': current_user() is not None,
        })

    @app.route('/health')
    def health():
        """Health check endpoint."""
        try:
            users = get_auth_service().db.count_users()
            return jsonify({
                'status': 'ok',
                'users': users,
                'timestamp': datetime.now().isoformat()
            })
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return jsonify({
                'status': 'error',
                'message': str(e)
            }), 500

    @app.route('/register', methods=['POST'])
    def register():
        """Create an account. Does not log in."""
        data = request_body()
        if data is None:
            return error_response(INVALID_BODY_MESSAGE, 400)
        missing = missing_fields(data, ('name', 'email', 'password'))
        if missing:
            return error_response(f"Campos obrigatórios: {', '.join(missing)}", 400)

        result = get_auth_service().register(data['name'], data['email'], data['password'])
        return result_response(result, success_status=201)

    @app.route('/login', methods=['POST'])
    def login():
        """Log in and bind the account to this browser's session."""
        data = request_body()
        if data is None:
            return error_response(INVALID_BODY_MESSAGE, 400)
        missing = missing_fields(data, ('email', 'password'))
        if missing:
            return error_response(f"Campos obrigatórios: {', '.join(missing)}", 400)

        sid = session.get('sid') or uuid.uuid4().hex
        result = get_auth_service().login(data['email'], data['password'], session_key=sid)
        if result['success']:
            session['sid'] = sid
        return result_response(result)

    @app.route('/logout', methods=['POST'])
    def logout():
        """Log out and go back to the home page."""
        sid = session.get('sid')
        if sid:
            get_auth_service().logout(sid)
        session.clear()
        return redirect(url_for('home'))

    @app.route('/me')
    def me():
        """Current user's session view."""
        user = current_user()
        if user is None:
            return error_response(NOT_LOGGED_IN_MESSAGE, 401)
        return jsonify({'success': True, 'user': user})

    @app.route('/password', methods=['POST'])
    def change_password():
        """Change the logged-in user's password."""
        user = current_user()
        if user is None:
            return error_response(NOT_LOGGED_IN_MESSAGE, 401)

        data = request_body()
        if data is None:
            return error_response(INVALID_BODY_MESSAGE, 400)
        missing = missing_fields(data, ('current_password', 'new_password'))
        if missing:
            return error_response(f"Campos obrigatórios: {', '.join(missing)}", 400)

        result = get_auth_service().update_password(
            user['email'], data['current_password'], data['new_password']
        )
        return result_response(result)

    @app.route('/subscription', methods=['POST', 'DELETE'])
    def subscription():
        """Activate (POST) or cancel (DELETE) the premium plan."""
        user = current_user()
        if user is None:
            return error_response(NOT_LOGGED_IN_MESSAGE, 401)

        if request.method == 'POST':
            result = get_auth_service().subscribe(user['email'])
        else:
            result = get_auth_service().cancel_subscription(user['email'])

        if result['success']:
            result['user'] = current_user()
        return result_response(result)

    @app.route('/places')
    def places():
        """Destination autocomplete."""
        query = request.args.get('q', '')
        return jsonify({'suggestions': search_places(query)})

    @app.route('/itineraries', methods=['POST'])
    def itineraries():
        """Generate itineraries (premium subscribers only)."""
        user = current_user()
        if user is None:
            return error_response(LOGIN_REQUIRED_MESSAGE, 401)
        if not user['is_premium']:
            return error_response(PREMIUM_REQUIRED_MESSAGE, 403)

        data = request_body()
        if data is None:
            return error_response(INVALID_BODY_MESSAGE, 400)
        missing = missing_fields(data, ('destination',))
        if missing:
            return error_response(f"Campos obrigatórios: {', '.join(missing)}", 400)

        theme = data.get('theme') if isinstance(data.get('theme'), str) and data['theme'] else 'nature'
        dates = data.get('dates') if isinstance(data.get('dates'), str) else None

        try:
            plan = get_planner().plan_trip(
                data['destination'].strip(),
                theme,
                dates,
            )
        except Exception as e:
            logger.error(f"Critical error generating itineraries: {e}")
            return error_response(
                "Ocorreu um erro ao gerar seus roteiros. Por favor, tente novamente.", 500
            )

        return jsonify({'success': True, **plan})

    return app
