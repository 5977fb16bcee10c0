"""Asset Store: the document + blob store behind every request."""

import logging

from fastapi import Request

from api.assets.repositories.assets_repository import AssetsRepository
from api.transfers.repositories.transfers_repository import TransfersRepository
from config import Settings
from database import make_engine, make_session_factory, run_migrations
from errors import StoreUnavailable

logger = logging.getLogger(__name__)


class AssetStore:
    """Owns the engine and exposes the asset and transfer repositories.

    One instance is built per application by ``main.create_app`` and handed
    to request handlers through ``get_store``.
    """

    def __init__(self, settings: Settings):
        self.files_dir = settings.files_dir
        self.files_dir.mkdir(parents=True, exist_ok=True)
        self.engine = make_engine(settings.sqlalchemy_url)
        self.session_factory = make_session_factory(self.engine)
        self.assets = AssetsRepository(self.session_factory, self.files_dir)
        self.transfers = TransfersRepository(self.session_factory)

    def migrate(self):
        run_migrations(self.engine)
        logger.info("Asset store ready at %s", self.engine.url.render_as_string())

    def dispose(self):
        self.engine.dispose()


def get_store(request: Request) -> AssetStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreUnavailable(details="Asset store is not configured")
    return store
