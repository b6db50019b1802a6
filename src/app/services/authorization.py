"""
Authorization Engine

One declarative decision table over role x (resource, operation). Every
resource handler asks the engine instead of branching on roles itself.

An allowed request yields the ScopePredicate that the data layer must apply;
a refused one yields DENIED (403) or VALIDATION_ERROR (400) when the caller
left out a customer filter its role requires.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple
from uuid import UUID

from src.domain.entities import UserRole
from src.domain.identity_context import IdentityContext
from src.domain.scope import ScopePredicate
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

DENIED = "DENIED"
VALIDATION_ERROR = "VALIDATION_ERROR"


class ResourceKind(str, Enum):
    work_order = "work_order"
    report = "report"
    user = "user"


class Operation(str, Enum):
    read = "read"
    create = "create"
    complete = "complete"
    assign = "assign"
    set_active = "set_active"


class Rule(str, Enum):
    """How an allowed request is scoped."""

    # Whole provider; a requested customer_id narrows it
    provider_wide = "provider_wide"
    # Whole provider, but the caller must name one customer
    provider_customer_required = "provider_customer_required"
    # Only rows assigned to the caller; customer filters are ignored
    assigned_to_self = "assigned_to_self"
    # Only the caller's own customer, taken from the token
    own_customer = "own_customer"
    # User management limited to MANAGEABLE_ROLES[caller role]
    managed_roles = "managed_roles"
    deny = "deny"


Key = Tuple[UserRole, ResourceKind, Operation]

_admin, _dispatcher, _technician, _client = (
    UserRole.admin,
    UserRole.dispatcher,
    UserRole.technician,
    UserRole.client,
)
_wo, _report, _user = ResourceKind.work_order, ResourceKind.report, ResourceKind.user

DECISION_TABLE: Dict[Key, Rule] = {
    # WorkOrder read
    (_admin, _wo, Operation.read): Rule.provider_wide,
    (_dispatcher, _wo, Operation.read): Rule.provider_wide,
    (_technician, _wo, Operation.read): Rule.assigned_to_self,
    (_client, _wo, Operation.read): Rule.own_customer,
    # WorkOrder create
    (_admin, _wo, Operation.create): Rule.provider_wide,
    (_dispatcher, _wo, Operation.create): Rule.provider_wide,
    (_technician, _wo, Operation.create): Rule.deny,
    (_client, _wo, Operation.create): Rule.deny,
    # WorkOrder complete
    (_admin, _wo, Operation.complete): Rule.provider_wide,
    (_dispatcher, _wo, Operation.complete): Rule.provider_wide,
    (_technician, _wo, Operation.complete): Rule.assigned_to_self,
    (_client, _wo, Operation.complete): Rule.deny,
    # WorkOrder assign
    (_admin, _wo, Operation.assign): Rule.provider_wide,
    (_dispatcher, _wo, Operation.assign): Rule.provider_wide,
    (_technician, _wo, Operation.assign): Rule.deny,
    (_client, _wo, Operation.assign): Rule.deny,
    # Report read
    (_admin, _report, Operation.read): Rule.provider_customer_required,
    (_dispatcher, _report, Operation.read): Rule.provider_customer_required,
    (_technician, _report, Operation.read): Rule.deny,
    (_client, _report, Operation.read): Rule.own_customer,
    # User create
    (_admin, _user, Operation.create): Rule.managed_roles,
    (_dispatcher, _user, Operation.create): Rule.managed_roles,
    (_technician, _user, Operation.create): Rule.deny,
    (_client, _user, Operation.create): Rule.deny,
    # User set_active
    (_admin, _user, Operation.set_active): Rule.managed_roles,
    (_dispatcher, _user, Operation.set_active): Rule.managed_roles,
    (_technician, _user, Operation.set_active): Rule.deny,
    (_client, _user, Operation.set_active): Rule.deny,
}

# Nobody can create or manage an admin
MANAGEABLE_ROLES: Dict[UserRole, FrozenSet[UserRole]] = {
    UserRole.admin: frozenset(
        {UserRole.dispatcher, UserRole.technician, UserRole.client}
    ),
    UserRole.dispatcher: frozenset({UserRole.technician}),
    UserRole.technician: frozenset(),
    UserRole.client: frozenset(),
}


def _denied() -> Result[ScopePredicate]:
    return Return.err(Error(DENIED, "You are not allowed to perform this operation"))


class AuthorizationEngine:
    """Evaluates DECISION_TABLE. Stateless; one instance serves the whole app."""

    def __init__(
        self,
        table: Optional[Dict[Key, Rule]] = None,
        manageable_roles: Optional[Dict[UserRole, FrozenSet[UserRole]]] = None,
    ):
        self.table = DECISION_TABLE if table is None else table
        self.manageable_roles = (
            MANAGEABLE_ROLES if manageable_roles is None else manageable_roles
        )

    def rule_for(
        self, role: UserRole, resource: ResourceKind, operation: Operation
    ) -> Rule:
        return self.table.get((role, resource, operation), Rule.deny)

    def authorize(
        self,
        identity: IdentityContext,
        resource: ResourceKind,
        operation: Operation,
        requested_customer_id: Optional[UUID] = None,
        target_role: Optional[UserRole] = None,
    ) -> Result[ScopePredicate]:
        """
        Decide whether identity may perform operation on resource.

        Args:
            identity: Verified caller
            resource: Resource kind
            operation: Operation on that resource
            requested_customer_id: Customer filter or target supplied by the caller
            target_role: Role of the user being created/managed (user resource only)

        Returns:
            Result with the ScopePredicate to apply, or DENIED / VALIDATION_ERROR
        """
        rule = self.rule_for(identity.role, resource, operation)
        result = self._apply(rule, identity, requested_customer_id, target_role)
        if result.is_err():
            logger.info(
                f"Authorization refused: role={identity.role.value} "
                f"resource={resource.value} operation={operation.value} "
                f"code={result.error.code}"
            )
        return result

    def _apply(
        self,
        rule: Rule,
        identity: IdentityContext,
        requested_customer_id: Optional[UUID],
        target_role: Optional[UserRole],
    ) -> Result[ScopePredicate]:
        provider_id = identity.service_provider_id

        if rule == Rule.provider_wide:
            return Return.ok(
                ScopePredicate(
                    service_provider_id=provider_id, customer_id=requested_customer_id
                )
            )

        if rule == Rule.provider_customer_required:
            if requested_customer_id is None:
                return Return.err(
                    Error(VALIDATION_ERROR, "customer_id is required for this role")
                )
            return Return.ok(
                ScopePredicate(
                    service_provider_id=provider_id, customer_id=requested_customer_id
                )
            )

        if rule == Rule.assigned_to_self:
            return Return.ok(
                ScopePredicate(
                    service_provider_id=provider_id, assigned_to=identity.user_id
                )
            )

        if rule == Rule.own_customer:
            # The token's customer is authoritative; a different one is never substituted
            if identity.customer_id is None:
                return _denied()
            if (
                requested_customer_id is not None
                and requested_customer_id != identity.customer_id
            ):
                return _denied()
            return Return.ok(
                ScopePredicate(
                    service_provider_id=provider_id, customer_id=identity.customer_id
                )
            )

        if rule == Rule.managed_roles:
            if target_role is None:
                return Return.err(Error(VALIDATION_ERROR, "role is required"))
            if target_role not in self.manageable_roles.get(identity.role, frozenset()):
                return _denied()
            return Return.ok(ScopePredicate(service_provider_id=provider_id))

        return _denied()
