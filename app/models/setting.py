"""Модель настроек."""
import uuid

from sqlalchemy import String, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Setting(Base):
    """Модель настроек (ключ-значение, глобальные или на уровне бизнеса)."""

    __tablename__ = "settings"
    __table_args__ = (UniqueConstraint("business_id", "key", name="uq_settings_business_key"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    business_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=True
    )
    key: Mapped[str] = mapped_column(String, nullable=False)
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
