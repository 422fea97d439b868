"""Project model."""

from sqlalchemy import Column, Integer

from src.database import Base
from src.models.mixins import ShowcaseMixin, TimestampMixin


class Project(Base, TimestampMixin, ShowcaseMixin):
    """A completed or ongoing project shown in the site portfolio."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
