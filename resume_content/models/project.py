"""Project portfolio models."""

from typing import List, Optional

from pydantic import Field

from .base import ContentModel


class Project(ContentModel):
    """A consulting/engineering project in problem-action-result form."""
    id: str = ""
    title: str = ""
    duration: str = ""
    location: str = ""
    client_type: str = ""
    project_type: str = ""
    industry: str = ""
    business_unit: str = ""
    problem: str = ""
    action: str = ""
    result: str = ""
    technologies: List[str] = Field(default_factory=list)
    team_size: Optional[int] = None
    budget: Optional[str] = None


class EnhancedProject(Project):
    """Project with derived complexity, impact and tags."""
    complexity: str = "Low"
    impact: str = "Medium"
    tags: List[str] = Field(default_factory=list)
