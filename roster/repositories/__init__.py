"""
Persistence adapters.

Both stores expose the same methods (list/get/add/update/delete students) and
raise the errors from roster.core.errors. Services pick one through
roster.services.student_service.build_store and never touch the file or the
database directly.
"""
