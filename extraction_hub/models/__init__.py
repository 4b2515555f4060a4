from .user import User
from .profile import Profile
from .user_role import UserRole
from .permission import Permission, RolePermission
from .credential import Credential
from .job import Job
from .job_execution import JobExecution

__all__ = [
    "User",
    "Profile",
    "UserRole",
    "Permission",
    "RolePermission",
    "Credential",
    "Job",
    "JobExecution",
]
