"""Sample catalogue loaded into an empty store on startup."""

import logging

from coursehub.storage.base import Storage
from coursehub.storage.records import CourseCategory, NewCourse

logger = logging.getLogger(__name__)

_IMAGE_PARAMS = "?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=250"

SAMPLE_COURSES = [
    NewCourse(
        title="Full Stack Web Development",
        description="Master modern web development with React, Node.js, and database technologies.",
        category=CourseCategory.TECHNOLOGY,
        price=14950,
        original_price=24950,
        duration="12 weeks",
        enrolled=2340,
        image_url=f"https://images.unsplash.com/photo-1531482615713-2afd69097998{_IMAGE_PARAMS}",
    ),
    NewCourse(
        title="Digital Marketing Strategy",
        description="Learn to create and execute effective digital marketing campaigns across all channels.",
        category=CourseCategory.BUSINESS,
        price=9950,
        original_price=17450,
        duration="8 weeks",
        enrolled=1876,
        image_url=f"https://images.unsplash.com/photo-1556761175-b413da4baf72{_IMAGE_PARAMS}",
    ),
    NewCourse(
        title="UX/UI Design Fundamentals",
        description="Create intuitive and beautiful user experiences with industry-standard design tools.",
        category=CourseCategory.DESIGN,
        price=12450,
        original_price=19950,
        duration="10 weeks",
        enrolled=1523,
        image_url=f"https://images.unsplash.com/photo-1573496359142-b8d87734a5a2{_IMAGE_PARAMS}",
    ),
    NewCourse(
        title="Data Science & Analytics",
        description="Transform data into insights using Python, R, and machine learning techniques.",
        category=CourseCategory.TECHNOLOGY,
        price=17450,
        original_price=27450,
        duration="16 weeks",
        enrolled=987,
        image_url=f"https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d{_IMAGE_PARAMS}",
    ),
    NewCourse(
        title="Business English Mastery",
        description="Advance your professional communication skills in English for global business.",
        category=CourseCategory.LANGUAGE,
        price=7450,
        original_price=12450,
        duration="6 weeks",
        enrolled=3210,
        image_url=f"https://images.unsplash.com/photo-1596484552834-6a58f850e0a1{_IMAGE_PARAMS}",
    ),
    NewCourse(
        title="Financial Management",
        description="Master personal and business financial planning, budgeting, and investment strategies.",
        category=CourseCategory.BUSINESS,
        price=8950,
        original_price=14950,
        duration="8 weeks",
        enrolled=1456,
        image_url=f"https://images.unsplash.com/photo-1559526324-4b87b5e36e44{_IMAGE_PARAMS}",
    ),
]


def seed_courses(storage: Storage) -> int:
    """Insert the sample courses if the store has none. Returns how many were added."""
    if storage.get_all_courses():
        return 0

    for course in SAMPLE_COURSES:
        storage.create_course(course)

    logger.info('Seeded %d sample courses.', len(SAMPLE_COURSES))
    return len(SAMPLE_COURSES)
