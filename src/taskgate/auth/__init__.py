"""
Authorization subsystem.

Components:
- strategies.py: interchangeable rules (role, permission, owner, hours, composites)
  and the registry that builds them from config strings
- context.py: AuthorizationContext, the holder/applier of the active rule
"""

from .context import AuthorizationContext
from .strategies import (
    AllOf,
    AllowAll,
    AnyOf,
    DenyAll,
    OwnerStrategy,
    PermissionStrategy,
    RoleStrategy,
    StrategyRegistry,
    TimeWindowStrategy,
    parse_strategy,
)

__all__ = [
    "AllOf",
    "AllowAll",
    "AnyOf",
    "AuthorizationContext",
    "DenyAll",
    "OwnerStrategy",
    "PermissionStrategy",
    "RoleStrategy",
    "StrategyRegistry",
    "TimeWindowStrategy",
    "parse_strategy",
]
