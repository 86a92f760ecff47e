from sqlalchemy import Column, Integer, String, Index
from database import Base


class User(Base):
    """
    A user account managed through the API.

    The id is assigned by the database on insert. Email uniqueness is
    expected of callers but not enforced at the schema level.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)

    __table_args__ = (
        Index('idx_users_email', 'email'),
        # Ids of deleted users are never handed out again
        {'sqlite_autoincrement': True},
    )

    def __repr__(self):
        return f"<User id={self.id} name={self.name!r} email={self.email!r}>"
