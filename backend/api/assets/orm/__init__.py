from api.assets.orm.asset_model import AssetModel

__all__ = ["AssetModel"]
