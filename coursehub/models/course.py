"""
Course Model Module
Defines the data models read from and written to Supabase
"""
from typing import Dict, List, Optional
from dataclasses import dataclass, field


@dataclass
class Section:
    """
    Section Model
    One row of the course_sections table; completed is derived per user
    """
    id: str
    title: str
    order_index: int
    description: Optional[str] = None
    completed: bool = False

    @classmethod
    def from_row(cls, row: Dict, completed_ids=frozenset()) -> "Section":
        return cls(
            id=row['id'],
            title=row.get('title', ''),
            description=row.get('description'),
            order_index=int(row.get('order_index') or 0),
            completed=row['id'] in completed_ids,
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'order_index': self.order_index,
            'completed': self.completed,
        }


@dataclass
class Course:
    """
    Course Model
    Represents a course in the system with the Supabase schema.
    sections is None when the course was read without its course_sections join.
    """
    id: str
    title: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    vimeo_url: Optional[str] = None
    sections: Optional[List[Section]] = None

    @classmethod
    def from_row(cls, row: Dict, completed_ids=None) -> "Course":
        """
        Build a course from a courses row
        @param row: Supabase row, optionally carrying a nested course_sections list
        @param completed_ids: set of section ids the current user has completed
        @returns: Course with its sections sorted by order_index
        """
        sections = None
        if 'course_sections' in row:
            completed_ids = completed_ids or frozenset()
            sections = sorted(
                (Section.from_row(s, completed_ids) for s in row['course_sections'] or []),
                key=lambda section: section.order_index
            )
        return cls(
            id=row['id'],
            title=row.get('title', ''),
            description=row.get('description'),
            thumbnail_url=row.get('thumbnail_url'),
            vimeo_url=row.get('vimeo_url'),
            sections=sections,
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'thumbnail_url': self.thumbnail_url,
            'vimeo_url': self.vimeo_url,
            'sections': [s.to_dict() for s in self.sections] if self.sections is not None else None,
        }


@dataclass
class Enrollment:
    """Links the current user to a course; progress is the stored scalar"""
    course_id: str
    progress: int = 0

    @classmethod
    def from_row(cls, row: Dict) -> "Enrollment":
        return cls(course_id=row['course_id'], progress=int(row.get('progress') or 0))


@dataclass
class SectionCompletion:
    section_id: str


@dataclass
class UserSession:
    """The app-side view of a Supabase auth session"""
    user_id: str
    access_token: str
    refresh_token: str
    email: Optional[str] = None

    def to_cookie(self) -> Dict[str, str]:
        return {'access_token': self.access_token, 'refresh_token': self.refresh_token}


@dataclass
class DashboardData:
    """Everything the dashboard renders, produced by one full fetch"""
    courses: List[Course] = field(default_factory=list)
    enrollments: List[Enrollment] = field(default_factory=list)


@dataclass
class CourseDetail:
    course: Course
    progress: int = 0
