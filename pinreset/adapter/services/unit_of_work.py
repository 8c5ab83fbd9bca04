from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from pinreset.adapter.repositories.user_repository import UserRepository
from pinreset.app.repositories.reset_record_storage import IResetRecordStorage
from pinreset.app.services.unit_of_work import PersistenceError, UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern

    Users live in the database session; reset records live in their own
    storage, which is not transactional and is shared between units of work.
    """

    def __init__(self, session: AsyncSession, reset_records: IResetRecordStorage):
        self.session = session
        self.reset_records = reset_records

    async def __aenter__(self):
        self.users = UserRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc

    async def rollback(self):
        await self.session.rollback()
