from app.services.cleanup import ReferentialCleanup
from app.services.query import QueryComposer
from app.services.resolver import CrossEntityResolver

__all__ = ["CrossEntityResolver", "QueryComposer", "ReferentialCleanup"]
