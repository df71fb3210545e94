from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """Staff member of an organization; professionals are the users appointments are booked with."""

    __tablename__ = "users"
    id: str = Field(primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    email: str | None = Field(default=None, index=True)
    name: str | None = None
    is_active: bool = True
