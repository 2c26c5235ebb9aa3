"""Identity gate - map caller principals to base access roles."""

from enum import Enum
from typing import Optional

from realty_office.utils.errors import UnauthorizedError
from realty_office.utils.logging import get_structured_logger, mask_principal
from realty_office.utils.logging_config import OfficeConfig

logger = get_structured_logger(__name__)


class UserRole(str, Enum):
    """Base access level of an identity, independent of any agent record."""
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


class AccessControl:
    """
    Role registry for caller identities.
    
    The first non-anonymous identity to initialize becomes administrator;
    later ones become plain users. Unknown identities are guests.
    """
    
    def __init__(self, anonymous_principal: Optional[str] = None):
        self.anonymous_principal = anonymous_principal or OfficeConfig.ANONYMOUS_PRINCIPAL
        self.roles: dict[str, UserRole] = {}
        self.admin_assigned = False
    
    def initialize(self, caller: str) -> UserRole:
        """Register a caller on first contact and return its role."""
        if caller == self.anonymous_principal:
            return UserRole.GUEST
        
        current = self.get_user_role(caller)
        if current != UserRole.GUEST:
            return current
        
        role = UserRole.USER if self.admin_assigned else UserRole.ADMIN
        self.roles[caller] = role
        if role == UserRole.ADMIN:
            self.admin_assigned = True
        
        logger.info(
            "Caller registered",
            caller=mask_principal(caller),
            user_role=role.value
        )
        return role
    
    def assign_role(self, caller: str, user: str, role: UserRole) -> None:
        """Grant a role to another identity (administrators only)."""
        if not self.is_admin(caller):
            raise UnauthorizedError("Only administrators can assign user roles")
        if user == self.anonymous_principal and role != UserRole.GUEST:
            raise UnauthorizedError("The anonymous identity cannot be granted access")
        
        self.roles[user] = role
        if role == UserRole.ADMIN:
            self.admin_assigned = True
        
        logger.info(
            "User role assigned",
            caller=mask_principal(caller),
            user=mask_principal(user),
            user_role=role.value
        )
    
    def get_user_role(self, caller: str) -> UserRole:
        if caller == self.anonymous_principal:
            return UserRole.GUEST
        return self.roles.get(caller, UserRole.GUEST)
    
    def is_admin(self, caller: str) -> bool:
        return self.get_user_role(caller) == UserRole.ADMIN
    
    def has_base_access(self, caller: str) -> bool:
        return self.get_user_role(caller) in (UserRole.ADMIN, UserRole.USER)
