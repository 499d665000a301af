from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import HTTPException

from poker.exceptions import PokerError

main = Blueprint('main', __name__)

INTERNAL_ERROR_MESSAGE = 'Try again later if the problem persist please contact support.'


@main.route('/ping', methods=['GET'])
def ping():
    return jsonify({'message': 'Server is active'})


# JSend envelope for every failure: "fail" for client errors, "error" for
# anything unexpected. See https://github.com/omniti-labs/jsend

@main.app_errorhandler(PokerError)
def handle_poker_error(exc):
    return jsonify({'status': 'fail', 'message': exc.message}), exc.status_code


@main.app_errorhandler(HTTPException)
def handle_http_exception(exc):
    status = 'error' if exc.code >= 500 else 'fail'
    return jsonify({'status': status, 'message': exc.description}), exc.code


@main.app_errorhandler(Exception)
def handle_unexpected_error(exc):
    current_app.logger.exception(f"[unhandled] {exc!r}")
    return jsonify({'status': 'error', 'message': INTERNAL_ERROR_MESSAGE}), 500
