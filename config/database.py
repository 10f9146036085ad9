"""
Database Configuration and Management (SQLAlchemy)

Handles database setup, connections, and keyed access to user records and
session pointers using SQLAlchemy ORM.
"""

import shutil
import logging
from pathlib import Path
from datetime import datetime
from sqlalchemy import create_engine, select, delete, update, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from config import settings
from config.models import Base, User, SessionRecord
from utils.timestamps import utc_now

logger = logging.getLogger(__name__)

USER_FIELDS = ('user_id', 'name', 'email', 'password_hash', 'is_premium', 'subscription_date', 'created_at')
UPDATABLE_FIELDS = {'name', 'password_hash', 'is_premium', 'subscription_date'}


class DuplicateEmailError(Exception):
    """Raised when a user record with the same email already exists."""

    def __init__(self, email):
        super().__init__(f"User with email {email} already exists")
        self.email = email


def user_to_dict(user):
    """Convert a User row into a plain record dictionary."""
    return {field: getattr(user, field) for field in USER_FIELDS}


class UserDatabase:
    """
    Storage accessor for user records and session pointers.

    Every operation opens its own short-lived session. Storage errors are
    logged, rolled back and re-raised to the caller.
    """

    def __init__(self, database_url=None, echo=False):
        self.database_url = database_url or settings.DATABASE_URL
        self.engine = create_engine(self.database_url, echo=echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def get_db_session(self):
        """
        Get a new database session.

        Returns:
            sqlalchemy.orm.Session: Database session
        """
        return self.SessionLocal()

    def init_database(self):
        """
        Initialize the database with all required tables.
        """
        logger.info("Initializing database...")

        database = self.engine.url.database
        if self.engine.url.get_backend_name() == 'sqlite' and database and database != ':memory:':
            Path(database).parent.mkdir(parents=True, exist_ok=True)

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database initialized successfully!")
        except Exception as e:
            logger.error(f"Error initializing database: {e}")
            raise

    def dispose(self):
        """Release pooled connections."""
        self.engine.dispose()

    def backup_database(self, backup_dir=None):
        """
        Create a backup of a file-based SQLite database.

        Args:
            backup_dir (Path, optional): Destination directory

        Returns:
            str or None: Path of the backup file, None if nothing was backed up
        """
        url = self.engine.url
        if url.get_backend_name() != 'sqlite' or not url.database or url.database == ':memory:':
            logger.warning("Database is not a SQLite file, cannot create backup")
            return None

        db_path = Path(url.database)
        if not db_path.exists():
            logger.warning("Database file does not exist, cannot create backup")
            return None

        backup_dir = Path(backup_dir or settings.BACKUP_DIR)
        backup_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = backup_dir / f"{db_path.stem}_backup_{timestamp}{db_path.suffix}"

        try:
            shutil.copy2(db_path, backup_path)
            logger.info(f"Database backed up to: {backup_path}")
            return str(backup_path)
        except OSError as e:
            logger.error(f"Error creating backup: {e}")
            return None

    def get_users(self):
        """
        Get all user records in creation order.

        Returns:
            list: List of user record dictionaries (empty if there are none)
        """
        session = self.get_db_session()
        try:
            stmt = select(User).order_by(User.created_at.asc(), User.user_id.asc())
            return [user_to_dict(user) for user in session.execute(stmt).scalars().all()]
        except Exception as e:
            logger.error(f"Error fetching users: {e}")
            raise
        finally:
            session.close()

    def count_users(self):
        """Count stored user records."""
        session = self.get_db_session()
        try:
            return session.execute(select(func.count()).select_from(User)).scalar_one()
        except Exception as e:
            logger.error(f"Error counting users: {e}")
            raise
        finally:
            session.close()

    def find_user_by_email(self, email):
        """
        Get a user record by email (exact, case-sensitive match).

        Args:
            email (str): Email address

        Returns:
            dict or None: User record, or None if not found
        """
        session = self.get_db_session()
        try:
            user = session.get(User, email)
            return user_to_dict(user) if user else None
        except Exception as e:
            logger.error(f"Error fetching user {email}: {e}")
            raise
        finally:
            session.close()

    def save_user(self, user):
        """
        Store a new user record.

        Args:
            user (dict): Record with the keys in USER_FIELDS

        Raises:
            DuplicateEmailError: If a record with the same email exists
        """
        session = self.get_db_session()
        try:
            if session.get(User, user['email']) is not None:
                raise DuplicateEmailError(user['email'])

            session.add(User(**{field: user[field] for field in USER_FIELDS if field in user}))
            session.commit()
            logger.info(f"Created user: {user['email']} (ID: {user.get('user_id')})")
        except DuplicateEmailError:
            logger.warning(f"User with email {user['email']} already exists")
            raise
        except IntegrityError as e:
            # Another writer inserted the same email between check and commit
            session.rollback()
            logger.warning(f"User with email {user['email']} already exists")
            raise DuplicateEmailError(user['email']) from e
        except Exception as e:
            session.rollback()
            logger.error(f"Error creating user: {e}")
            raise
        finally:
            session.close()

    def update_user(self, email, /, **fields):
        """
        Update fields of one user record.

        Args:
            email (str): Email of the record to update
            **fields: Columns to update (name, password_hash, is_premium, subscription_date)

        Returns:
            bool: True if a record was updated, False if none matched
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        session = self.get_db_session()
        try:
            stmt = update(User).where(User.email == email).values(**fields)
            result = session.execute(stmt)
            session.commit()
            return result.rowcount > 0
        except Exception as e:
            session.rollback()
            logger.error(f"Error updating user {email}: {e}")
            raise
        finally:
            session.close()

    def get_session_email(self, session_key):
        """
        Get the email a session key points to.

        Returns:
            str or None: Email, or None if no session exists
        """
        session = self.get_db_session()
        try:
            record = session.get(SessionRecord, session_key)
            return record.email if record else None
        except Exception as e:
            logger.error(f"Error fetching session: {e}")
            raise
        finally:
            session.close()

    def set_session(self, session_key, email):
        """
        Point a session key at a user, replacing any previous pointer.
        """
        session = self.get_db_session()
        try:
            record = session.get(SessionRecord, session_key)
            if record is None:
                session.add(SessionRecord(session_key=session_key, email=email))
            else:
                record.email = email
                record.created_at = utc_now()
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Error writing session: {e}")
            raise
        finally:
            session.close()

    def delete_session(self, session_key):
        """
        Remove a session pointer.

        Returns:
            bool: True if a session was deleted
        """
        session = self.get_db_session()
        try:
            result = session.execute(delete(SessionRecord).where(SessionRecord.session_key == session_key))
            session.commit()
            return result.rowcount > 0
        except Exception as e:
            session.rollback()
            logger.error(f"Error deleting session: {e}")
            raise
        finally:
            session.close()
