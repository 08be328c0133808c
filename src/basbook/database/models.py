"""SQLAlchemy models for basbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Category(Base):
    """Expense category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    bas_label = Column(String(10), nullable=True)
    is_deductible = Column(Boolean, default=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Provider(Base):
    """Vendor/supplier model."""

    __tablename__ = "providers"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    is_international = Column(Boolean, default=False, nullable=False)
    default_category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    abn_arn = Column(String(20), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    default_category = relationship("Category")
    expenses = relationship("Expense", back_populates="provider")


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    abn = Column(Text, nullable=True)
    is_psi_eligible = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    incomes = relationship("Income", back_populates="client")


class ImportJob(Base):
    """Import batch ledger model."""

    __tablename__ = "import_jobs"

    id = Column(Integer, primary_key=True)
    kind = Column(String(10), nullable=False)
    filename = Column(String(255), nullable=False)
    source = Column(String(20), default="manual", nullable=False)
    status = Column(String(20), default="pending", nullable=False)
    total_rows = Column(Integer, default=0, nullable=False)
    imported_count = Column(Integer, default=0, nullable=False)
    skipped_count = Column(Integer, default=0, nullable=False)
    error_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    completed_at = Column(DateTime, nullable=True)
    error_message = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_import_jobs_status", "status"),
        Index("idx_import_jobs_created", "created_at"),
    )

    # Relationships
    expenses = relationship("Expense", back_populates="import_job")
    incomes = relationship("Income", back_populates="import_job")


class Expense(Base):
    """Expense model. Amounts in cents, GST-inclusive."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    amount_cents = Column(Integer, nullable=False)
    gst_cents = Column(Integer, nullable=False)
    biz_percent = Column(Integer, default=100, nullable=False)
    currency = Column(String(3), default="AUD", nullable=False)
    provider_id = Column(Integer, ForeignKey("providers.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    import_job_id = Column(Integer, ForeignKey("import_jobs.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("idx_expenses_date", "date"),
        Index("idx_expenses_provider", "provider_id"),
        Index("idx_expenses_import_job", "import_job_id"),
    )

    # Relationships
    provider = relationship("Provider", back_populates="expenses")
    category = relationship("Category")
    import_job = relationship("ImportJob", back_populates="expenses")


class Income(Base):
    """Income (invoice) model. Amounts in cents."""

    __tablename__ = "incomes"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    invoice_num = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    subtotal_cents = Column(Integer, nullable=False)
    gst_cents = Column(Integer, nullable=False)
    total_cents = Column(Integer, nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    import_job_id = Column(Integer, ForeignKey("import_jobs.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("idx_incomes_date", "date"),
        Index("idx_incomes_client", "client_id"),
        Index("idx_incomes_import_job", "import_job_id"),
    )

    # Relationships
    client = relationship("Client", back_populates="incomes")
    import_job = relationship("ImportJob", back_populates="incomes")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
