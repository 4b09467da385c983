from flask import current_app, request


def page_params():
    """Read ``page`` and ``limit`` from the query string, clamped to sane bounds."""
    default = current_app.config.get("DEFAULT_PAGE_SIZE", 10)
    maximum = current_app.config.get("MAX_PAGE_SIZE", 100)
    page = request.args.get("page", 1, type=int) or 1
    limit = request.args.get("limit", default, type=int) or default
    return max(page, 1), min(max(limit, 1), maximum)


def paginate(query, page, limit):
    """Run ``query`` for one page and return ``(items, pagination)``."""
    result = query.paginate(page=page, per_page=limit, error_out=False)
    return result.items, {
        "page": page,
        "limit": limit,
        "total": result.total,
        "pages": result.pages,
    }
