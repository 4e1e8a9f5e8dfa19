import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import Conflict

logger = logging.getLogger(__name__)


def transactional(method):
    """Run a service method as one transaction.

    Commits when the method returns and rolls back every write (entries,
    reviews and the rating aggregate alike) when it raises. A unique
    constraint violation that slipped past the explicit checks is reported
    as Conflict.
    """
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            result = method(self, *args, **kwargs)
            self.session.commit()
            return result
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("%s rolled back on integrity error: %s", method.__qualname__, e.orig)
            raise Conflict("Record already exists") from e
        except Exception:
            self.session.rollback()
            raise
    return wrapper


class BaseService:
    def __init__(self, session: Session):
        self.session = session
