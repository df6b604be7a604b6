"""MongoDB implementation of UserRepository."""

import uuid
from dataclasses import replace
from datetime import date, datetime, time
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import ConflictError, InternalError
from domain.model.user import Provider, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The unique indexes are the authoritative guard against two concurrent
        registrations claiming the same email or username.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('username', 1)], 'idx_users_username', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        birth_date = doc.get('birth_date')
        if isinstance(birth_date, datetime):
            birth_date = birth_date.date()
        return User(
            id=doc['_id'],
            name=doc.get('name'),
            lastname=doc.get('lastname'),
            username=doc['username'],
            email=doc['email'],
            provider=Provider(doc.get('provider', Provider.LOCAL.value).upper()),
            active=doc.get('active', True),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            birth_date=birth_date,
        )

    def _to_document(self, user: User) -> dict:
        # BSON has no plain date type
        birth_date = user.birth_date
        if isinstance(birth_date, date) and not isinstance(birth_date, datetime):
            birth_date = datetime.combine(birth_date, time.min)
        return {
            'name': user.name,
            'lastname': user.lastname,
            'username': user.username,
            'email': user.email,
            'provider': user.provider.value,
            'active': user.active,
            'birth_date': birth_date,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
        }

    @staticmethod
    def _conflict_from(error: DuplicateKeyError) -> ConflictError:
        key_pattern = (error.details or {}).get('keyPattern') or {}
        if 'username' in key_pattern or ('email' not in key_pattern and 'username' in str(error)):
            return ConflictError("username in use")
        return ConflictError("email in use")

    # ── write operations ─────────────────────────────────────

    def save(self, user: User, password_hash: str | None = None) -> User:
        """Insert a new user or upsert an existing one by id."""
        doc = self._to_document(user)
        if password_hash is not None:
            doc['password_hash'] = password_hash

        try:
            if user.id is None:
                user_id = uuid.uuid4().hex
                self.collection.insert_one({'_id': user_id, **doc})
                logger.info("User inserted", extra={"userId": user_id, "email": user.email})
            else:
                user_id = user.id
                self.collection.update_one({'_id': user_id}, {'$set': doc}, upsert=True)
                logger.debug("User updated", extra={"userId": user_id})
        except DuplicateKeyError as e:
            conflict = self._conflict_from(e)
            logger.warning("User save rejected by unique index", extra={
                "userId": user.id, "reason": conflict.message,
            })
            raise conflict from e
        except PyMongoError as e:
            logger.error("Failed to save user", extra={"userId": user.id, "error": str(e)})
            raise InternalError("Failed to save user") from e

        return replace(user, id=user_id)

    def delete(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise InternalError("Failed to delete user") from e
        return result.deleted_count > 0

    # ── read operations ──────────────────────────────────────

    def _find_one(self, query: dict, action: str) -> User | None:
        try:
            doc = self.collection.find_one(query, {'password_hash': 0})
        except PyMongoError as e:
            logger.error(f"Failed to {action}", extra={"query": query, "error": str(e)})
            raise InternalError(f"Failed to {action}") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        return self._find_one({'_id': user_id}, "get user by ID")

    def get_by_email(self, email: str) -> User | None:
        return self._find_one({'email': email}, "get user by email")

    def get_by_username(self, username: str) -> User | None:
        return self._find_one({'username': username}, "get user by username")

    def find_all(self) -> list[User]:
        try:
            docs = list(self.collection.find({}, {'password_hash': 0}))
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise InternalError("Failed to list users") from e
        return [self._to_domain(doc) for doc in docs]

    def _exists(self, query: dict) -> bool:
        try:
            return self.collection.count_documents(query, limit=1) > 0
        except PyMongoError as e:
            logger.error("Failed to check user existence", extra={"query": query, "error": str(e)})
            raise InternalError("Failed to check user existence") from e

    def exists_by_email(self, email: str) -> bool:
        return self._exists({'email': email})

    def exists_by_username(self, username: str) -> bool:
        return self._exists({'username': username})
