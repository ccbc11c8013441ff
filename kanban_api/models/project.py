from sqlalchemy import Column, String, Text, Integer, ForeignKey, Table
from sqlalchemy.orm import relationship
from .base import Base, BaseModel


project_users = Table(
    "project_users",
    Base.metadata,
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Project(BaseModel):
    __tablename__ = "projects"
    
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    
    # Relationships
    participants = relationship("User", secondary=project_users, order_by="User.id")
