"""Ad financial scenario model."""

import uuid

from sqlalchemy import Boolean, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from adprojection.db.base import Base, TimestampMixin


class AdFinancialScenario(Base, TimestampMixin):
    """Named configuration identifying one projection run (e.g. "Base Case")."""

    __tablename__ = "ad_financial_scenarios"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<AdFinancialScenario(id={self.id}, name={self.name!r})>"
