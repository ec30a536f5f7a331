# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database unit of work implementation."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todos_auth.shared.errors import StoreError
from todos_auth.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork(AbstractContextManager):
    """SQLAlchemy-backed unit of work.

    Commits on a clean exit, rolls back otherwise. Driver failures leave as
    ``StoreError`` so callers never see SQLAlchemy types.
    """

    session_factory: Callable[[], Session]
    _session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        logger.debug("uow: session opened")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._session is not None
        try:
            if exc is not None:
                logger.debug(f"uow: rollback due to {exc_type.__name__}")
                self._session.rollback()
                if isinstance(exc, SQLAlchemyError):
                    logger.opt(exception=exc).error("uow: store operation failed")
                    raise StoreError() from exc
            else:
                self._session.commit()
                logger.debug("uow: committed")
        except SQLAlchemyError as commit_exc:
            logger.opt(exception=commit_exc).error("uow: exception while finalising")
            self._session.rollback()
            raise StoreError() from commit_exc
        finally:
            self._session.close()
            logger.debug("uow: session closed")
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            msg = "UnitOfWork session accessed before entering context"
            raise RuntimeError(msg)
        return self._session


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Provide a context manager yielding a session."""

    with SqlAlchemyUnitOfWork(factory) as uow:
        yield uow.session
