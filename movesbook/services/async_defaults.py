import logging
import re
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movesbook.db.base_class import generate_id, utcnow
from movesbook.models.defaults import DEFAULTS_MODELS, DefaultsKind
from movesbook.services.async_auth import AsyncAuthService
from movesbook.services.errors import Unauthorized, ValidationError, database_error
from movesbook.utils.logger import defaults_logger

logger = logging.getLogger(__name__)

# ISO-639 language with an optional region or script subtag: en, pt-BR, zh-Hant
LANGUAGE_PATTERN = re.compile(r"^[a-z]{2,3}(-[A-Za-z0-9]{2,8})?$")


def validate_language(language: Optional[str]) -> str:
    if not language:
        raise ValidationError("Language parameter required")
    if not LANGUAGE_PATTERN.match(language):
        raise ValidationError(f"Invalid language code: {language}")
    return language


def _upsert_insert(dialect_name: str):
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        return None
    return insert


class DefaultsService:
    """
    Per-language defaults store for colors, favourites and tools.

    Each kind keeps at most one configuration blob per language code.
    The blob is opaque to the service: it is stored and returned as-is.
    Reads are public; writes require the super admin password.
    """

    @staticmethod
    async def load(db: AsyncSession, kind: DefaultsKind, language: str) -> Optional[Any]:
        """Return the stored blob for ``language``, or None when nothing was saved."""
        language = validate_language(language)
        model = DEFAULTS_MODELS[kind]

        try:
            result = await db.execute(
                select(model.data)
                .where(model.language == language)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise database_error(e, f"Failed to load {kind.value} defaults")

    @staticmethod
    async def load_all(db: AsyncSession, language: str) -> Dict[str, Optional[Any]]:
        """Return every kind's blob for ``language``; missing kinds map to None."""
        language = validate_language(language)
        return {
            kind.value: await DefaultsService.load(db, kind, language)
            for kind in DefaultsKind
        }

    @staticmethod
    async def save(
        db: AsyncSession,
        kind: DefaultsKind,
        language: Optional[str],
        data: Optional[Any],
        password: Optional[str]
    ) -> str:
        """
        Create or replace the blob for ``language``.

        The credential is checked before the payload is looked at.

        Returns:
            The confirmation message, e.g. "Color defaults saved for en".

        Raises:
            Unauthorized: wrong or missing super admin password
            ValidationError: missing language or data, or malformed language
        """
        if not await AsyncAuthService.verify_admin_password(db, password):
            defaults_logger.warning(f"Rejected {kind.value} defaults save", context=kind.value)
            raise Unauthorized("Invalid Super Admin password")

        if not language or data is None:
            raise ValidationError("Missing required fields")
        language = validate_language(language)

        model = DEFAULTS_MODELS[kind]
        now = utcnow()

        try:
            insert = _upsert_insert(db.get_bind().dialect.name)
            if insert is not None:
                stmt = insert(model).values(
                    id=generate_id(),
                    language=language,
                    data=data,
                    created_at=now,
                    updated_at=now,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=["language"],
                    set_={"data": stmt.excluded.data, "updated_at": now},
                )
                await db.execute(stmt)
            else:
                result = await db.execute(
                    select(model).where(model.language == language).with_for_update()
                )
                row = result.scalar_one_or_none()
                if row is None:
                    db.add(model(language=language, data=data))
                else:
                    row.data = data
                    row.updated_at = now
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(e, f"Failed to save {kind.value} defaults")

        defaults_logger.success(f"{model.label} defaults saved", context=kind.value, language=language)
        return f"{model.label} defaults saved for {language}"
