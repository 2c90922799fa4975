from flask import jsonify

from sudut_buku.errors import LibraryError


def json_ok(data=None, code=200):
    return jsonify({"success": True, "data": data}), code


def json_error(error: LibraryError):
    return jsonify({
        "success": False,
        "error": error.error_code,
        "message": error.message,
    }), error.status_code
