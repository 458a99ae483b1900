from .profiles import Profile
from .user_roles import UsageRecord, UserRole

# Expose module-level names for `from echowrite.models import *`
__all__ = [
	"Profile",
	"UsageRecord",
	"UserRole",
]
