import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from bubbleburst.errors import StorageError, UninitializedStoreError
from bubbleburst.models import PlayerRecord, UserScore
from .state import ScreenID


_SCORE_COLUMNS = {
    ScreenID.SCREEN1: 'screen1_score',
    ScreenID.SCREEN2: 'screen2_score',
}


class ScoreStore:
    """Player submissions and per-user screen scores.

    A store built without a database runs degraded: writes are skipped and
    reads come back empty, except :meth:`upsert_score` which raises
    :class:`UninitializedStoreError`.
    """

    def __init__(self, database=None, logger: Optional[logging.Logger] = None):
        self._db = database
        self.logger = logger or logging.getLogger(__name__)

    @property
    def ready(self) -> bool:
        return self._db is not None

    @contextmanager
    def _guard(self, op: str):
        try:
            yield self._db.session
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            self.logger.error(f"[store-error] op={op} error={exc}")
            raise StorageError(f"{op} failed: {exc}") from exc

    def _skip(self, op: str) -> None:
        self.logger.warning(f"[store-skip] op={op} store not initialized")

    def insert(self, name: str) -> Optional[str]:
        if not self.ready:
            self._skip('insert')
            return None
        with self._guard('insert') as session:
            record = PlayerRecord(name=name)
            session.add(record)
            session.commit()
            return record.id

    def upsert_score(self, user_id: str, screen: ScreenID, score: float) -> UserScore:
        if not self.ready:
            raise UninitializedStoreError('DB not initialized')
        column = _SCORE_COLUMNS[ScreenID(screen)]
        with self._guard('upsert_score') as session:
            row = UserScore.query.filter_by(user_id=user_id).first()
            if row is None:
                row = UserScore(user_id=user_id)
                session.add(row)
            setattr(row, column, score)
            session.commit()
            return row

    def update_score_by_id(self, record_id: str, score: float) -> bool:
        if not self.ready:
            self._skip('update_score_by_id')
            return False
        with self._guard('update_score_by_id') as session:
            record = session.get(PlayerRecord, record_id)
            if record is None:
                self.logger.warning(f"[store-miss] op=update_score_by_id id={record_id}")
                return False
            record.score = score
            session.commit()
            return True

    def query_top_by_score(self, limit: int) -> List[PlayerRecord]:
        if not self.ready:
            self._skip('query_top_by_score')
            return []
        with self._guard('query_top_by_score'):
            return (
                PlayerRecord.query
                .filter(PlayerRecord.score.isnot(None))
                .order_by(PlayerRecord.score.desc(), PlayerRecord.timestamp.desc())
                .limit(limit)
                .all()
            )

    def all_user_scores(self) -> List[UserScore]:
        if not self.ready:
            self._skip('all_user_scores')
            return []
        with self._guard('all_user_scores'):
            return UserScore.query.order_by(UserScore.user_id).all()
