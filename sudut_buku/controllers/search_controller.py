from flask import Blueprint, current_app, request

from sudut_buku.errors import ValidationError
from sudut_buku.extensions import db
from sudut_buku.services.search_service import SearchService
from sudut_buku.utils.responses import json_error, json_ok

search_bp = Blueprint("search", __name__)


@search_bp.get("/search")
def search_books():
    q = request.args.get("q")
    if q is None:
        return json_error(ValidationError("q is required"))

    service = SearchService(db.session, current_app.config.get("SEARCH_MAX_WORKERS"))
    return json_ok(service.search(request.args.get("mode"), q))
