import logging

from flask import jsonify

logger = logging.getLogger(__name__)


def setup_auth_middleware(jwt):
    """Map token failures to the API's status codes: missing → 401, bad or expired → 403"""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({'message': 'Token no proporcionado'}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.debug(f"Rejected token: {reason}")
        return jsonify({'message': 'Token inválido'}), 403

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({'message': 'Token inválido'}), 403