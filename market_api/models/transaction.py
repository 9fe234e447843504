"""Transaction model module."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from market_api.database.database import Base, utcnow
from market_api.models.material import Material
from market_api.models.user import User


class Transaction(Base):
    """Sale of a material from a vendor to a customer.

    The three references are plain foreign keys; the store rejects rows
    pointing at missing users or materials, and refuses to delete a user or
    material that is still referenced.
    """

    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    vendor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False, index=True
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False, index=True
    )
    material_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("materials.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    # Joined on read paths only; writes go through the *_id columns
    vendor: Mapped[User] = relationship(foreign_keys=[vendor_id], viewonly=True)
    customer: Mapped[User] = relationship(foreign_keys=[customer_id], viewonly=True)
    material: Mapped[Material] = relationship(viewonly=True)
