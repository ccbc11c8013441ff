from sqlalchemy import Column, String, Integer, ForeignKey, Float, Text
from sqlalchemy.orm import relationship
from .base import BaseModel, UTCDateTime


class Sprint(BaseModel):
    __tablename__ = "sprints"
    
    name = Column(String, nullable=False)
    goal = Column(Text, nullable=True)
    estimation_type = Column(String, nullable=False)  # hour, story_point
    start_date = Column(UTCDateTime, nullable=True)
    end_date = Column(UTCDateTime, nullable=True)
    status = Column(String, default="planned")  # planned, active, completed
    
    # Denormalized caches, recomputed from tasks on every read
    total_estimation = Column(Float, default=0.0)
    remaining_estimation = Column(Float, default=0.0)
    
    # Foreign keys
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    
    # Relationships
    tasks = relationship("Task", back_populates="sprint", order_by="Task.id")
