#import all models so SQLAlchemy registers them in Base.metadata

from store.data.models.category import CategoryModel
from store.data.models.product import ProductModel
from store.data.models.user import UserModel
from store.data.models.order import OrderModel
from store.data.models.product_order import ProductOrderModel

__all__ = ["CategoryModel", "ProductModel", "UserModel", "OrderModel", "ProductOrderModel"]
