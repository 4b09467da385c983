from datetime import datetime

from models import db, BIGINT, isoformat


class Favorite(db.Model):
    __tablename__ = "favorite"
    __table_args__ = (db.UniqueConstraint("user_id", "product_id", name="uq_favorite_user_product"),)

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    product = db.relationship("Product", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "productId": self.product_id,
            "product": self.product.to_dict() if self.product else None,
            "createdAt": isoformat(self.created_at),
        }
