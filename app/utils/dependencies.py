"""Dependency injection functions for FastAPI routes.

Uses descriptor pattern to automatically create dependency functions
for all form services, eliminating code duplication.
"""

from typing import Any, Type, TypeVar

from fastapi import Depends

from app.services.course_form_service import CourseFormService
from app.services.student_form_service import StudentFormService
from app.utils.backend import BackendClient, get_backend_client
from app.utils.options_cache import OptionsCache, get_options_cache
from app.utils.submission_gate import SubmissionGate, get_submission_gate

T = TypeVar("T")


class ServiceDependency:
    """Descriptor that creates a dependency injection function for a service.

    Caches the dependency function to ensure the same function object is returned
    each time, enabling proper use of FastAPI's dependency_overrides.
    """

    def __init__(self, service_class: Type[T]) -> None:
        """Initialize service dependency descriptor.

        Args:
            service_class: The form service class to create instances of.
        """
        self.service_class = service_class
        self._cached_func: Any = None

    def __get__(self, instance: Any, owner: type) -> Any:
        """Create and return cached dependency function when accessed."""
        if self._cached_func is None:

            def dependency_func(
                backend: BackendClient = Depends(get_backend_client),
                options_cache: OptionsCache = Depends(get_options_cache),
                gate: SubmissionGate = Depends(get_submission_gate),
            ) -> T:
                """Get service instance for dependency injection."""
                return self.service_class(backend, options_cache, gate)

            self._cached_func = dependency_func
        return self._cached_func


class ServiceDependencies:
    """Container for all service dependency injection functions."""

    course_form = ServiceDependency(CourseFormService)
    student_form = ServiceDependency(StudentFormService)


# Create singleton instance for easy access
dependencies = ServiceDependencies()
