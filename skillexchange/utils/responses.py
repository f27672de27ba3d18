"""Response envelope shared by every route: {success, data?, message?}."""

from flask import jsonify


def success_response(data=None, message=None, status=200):
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return jsonify(body), status
