from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, ok, transactional, validate_schema
from app.schemas.engagement import FavoriteRequest
from app.exceptions import ConflictError, NotFoundError
from models import db
from models.favorite import Favorite
from models.product import Product

favorites_bp = Blueprint("favorites", __name__, url_prefix=f"{API_PREFIX}/favorites")


@favorites_bp.route("", methods=["GET"])
@auth_required
def list_favorites():
    items = (
        Favorite.query
        .join(Product, Product.id == Favorite.product_id)
        .filter(Favorite.user_id == request.user.id, Product.is_active.is_(True))
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        .all()
    )
    return ok([f.to_dict() for f in items])


@favorites_bp.route("", methods=["POST"])
@auth_required
@validate_schema(FavoriteRequest)
def add_favorite():
    product_id = request.validated_data.productId
    product = db.session.get(Product, product_id)
    if product is None or not product.is_active:
        raise NotFoundError("Product not found")
    if Favorite.query.filter_by(user_id=request.user.id, product_id=product_id).first():
        raise ConflictError("Product already in favorites")
    with transactional("Failed to add favorite"):
        favorite = Favorite(user_id=request.user.id, product_id=product_id)
        db.session.add(favorite)
    return ok(favorite.to_dict(), message="Product added to favorites", status=201)


@favorites_bp.route("/<int:product_id>", methods=["DELETE"])
@auth_required
def remove_favorite(product_id):
    favorite = Favorite.query.filter_by(user_id=request.user.id, product_id=product_id).first()
    if favorite is None:
        raise NotFoundError("Favorite not found")
    with transactional("Failed to remove favorite"):
        db.session.delete(favorite)
    return ok(message="Product removed from favorites")


@favorites_bp.route("/check/<int:product_id>", methods=["GET"])
@auth_required
def check_favorite(product_id):
    exists = Favorite.query.filter_by(user_id=request.user.id, product_id=product_id).first() is not None
    return ok({"isFavorite": exists})
