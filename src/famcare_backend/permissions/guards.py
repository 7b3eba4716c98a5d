"""
Access guards for request handlers.

with_access_control wraps a handler so the rule engine is consulted before the
handler runs; authorize_resource_operation combines the rule engine with the
visibility gate for a concrete resource. The remaining helpers are the small role
checks route handlers use directly.
"""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional

from famcare_backend.api.exceptions import AccessDeniedException, ForbiddenException, NotFoundException
from famcare_backend.model.enums import UserRole
from famcare_backend.permissions.audit import log_access_event
from famcare_backend.permissions.context import AccessContext, create_access_context, get_attribute
from famcare_backend.permissions.engine import AccessDecisionEngine
from famcare_backend.permissions.evaluator import FAMILY_ADMIN_ROLES
from famcare_backend.permissions.gate import ResourceVisibilityGate
from famcare_backend.permissions.operations import Operation, required_level_for_operation
from famcare_backend.permissions.rules import ResourceType

logger = logging.getLogger(__name__)

ContextFactory = Callable[..., AccessContext]
Loader = Callable[..., Any]
CustomCheck = Callable[[AccessContext], bool]


def _deny(engine: AccessDecisionEngine, context: AccessContext, resource_type: ResourceType,
          operation: Operation, resource_id: Optional[str] = None, reason: Optional[str] = None):
    details = engine.get_access_details(context, resource_type)
    required_level = required_level_for_operation(operation)

    log_access_event(
        "denied",
        resource_type,
        operation,
        user_id=context.user_id,
        user_role=context.user_role,
        resource_id=resource_id,
        reason=reason or "matched rules: " + ", ".join(r.description for r in details.matched_rules),
    )

    raise AccessDeniedException(detail={
        "resource_type": resource_type.value,
        "operation": operation.value,
        "required_level": required_level.value,
        "access_level": details.access_level.value,
    })


def _granted(context: AccessContext, resource_type: ResourceType, operation: Operation,
             resource_id: Optional[str] = None):
    log_access_event("granted", resource_type, operation,
                     user_id=context.user_id, user_role=context.user_role, resource_id=resource_id)


def enforce_operation(engine: AccessDecisionEngine, context: AccessContext,
                      resource_type: ResourceType | str, operation: Operation | str,
                      resource_id: Optional[str] = None):
    """Raise AccessDeniedException unless the rule engine grants the operation"""
    resource_type = ResourceType(resource_type)
    operation = Operation(operation)

    if not engine.can_perform_operation(context, resource_type, operation):
        _deny(engine, context, resource_type, operation, resource_id)

    _granted(context, resource_type, operation, resource_id)


def with_access_control(engine: AccessDecisionEngine, resource_type: ResourceType | str,
                        operation: Operation | str, context_factory: Optional[ContextFactory] = None,
                        user_loader: Optional[Loader] = None, resource_loader: Optional[Loader] = None,
                        custom_check: Optional[CustomCheck] = None,
                        allow_if_resource_not_found: bool = False):
    """
    Decorator checking the rule engine before a handler runs.

    The AccessContext for a call comes either from context_factory, which receives
    the handler's arguments, or is built with create_access_context from
    user_loader and the optional resource_loader, both called with the handler's
    arguments.

    - user_loader returning None raises NotFoundException.
    - resource_loader raising NotFoundException is re-raised unless
      allow_if_resource_not_found is set, in which case the context is built
      without a resource (the usual setup for create handlers).
    - custom_check gets the context and vetoes the call with ForbiddenException
      when it returns False.

    Works for plain and async handlers; on denial the handler is never invoked
    and the exception propagates to the caller.
    """
    if (context_factory is None) == (user_loader is None):
        raise ValueError("with_access_control needs exactly one of context_factory or user_loader")

    resource_type = ResourceType(resource_type)
    operation = Operation(operation)

    def build_context(*args: Any, **kwargs: Any) -> AccessContext:
        if context_factory is not None:
            return context_factory(*args, **kwargs)

        user = user_loader(*args, **kwargs)
        if user is None:
            raise NotFoundException(detail="User not found")

        resource = None
        if resource_loader is not None:
            try:
                resource = resource_loader(*args, **kwargs)
            except NotFoundException:
                if not allow_if_resource_not_found:
                    raise
                logger.debug(f"Resource not found for {resource_type.value} {operation.value}, continuing without it")

        return create_access_context(user, resource)

    def check(*args: Any, **kwargs: Any):
        context = build_context(*args, **kwargs)

        if custom_check is not None and not custom_check(context):
            log_access_event("denied", resource_type, operation,
                             user_id=context.user_id, user_role=context.user_role, reason="custom check failed")
            raise ForbiddenException(detail="Access denied: Custom check failed")

        enforce_operation(engine, context, resource_type, operation)

    def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:

        if inspect.iscoroutinefunction(handler):
            @wraps(handler)
            async def async_wrapped(*args: Any, **kwargs: Any):
                check(*args, **kwargs)
                return await handler(*args, **kwargs)

            return async_wrapped

        @wraps(handler)
        def wrapped(*args: Any, **kwargs: Any):
            check(*args, **kwargs)
            return handler(*args, **kwargs)

        return wrapped

    return decorator


def authorize_resource_operation(engine: AccessDecisionEngine, gate: ResourceVisibilityGate,
                                 user: Any, resource: Any, resource_type: ResourceType | str,
                                 operation: Operation | str) -> bool:
    """
    Combined decision for an operation on a concrete resource.

    Allowed only if the rule engine grants the operation and the visibility gate
    admits the resource.
    """
    resource_type = ResourceType(resource_type)
    operation = Operation(operation)
    context = create_access_context(user, resource)

    if not engine.can_perform_operation(context, resource_type, operation):
        return False

    return gate.check_resource_access(resource, context.user_id, context.user_role, context.family_id)


def enforce_resource_operation(engine: AccessDecisionEngine, gate: ResourceVisibilityGate,
                               user: Any, resource: Any, resource_type: ResourceType | str,
                               operation: Operation | str):
    """
    Like authorize_resource_operation, but raises AccessDeniedException on denial.

    Exactly one access event is logged per call: granted once both layers agree,
    denied otherwise.
    """
    resource_type = ResourceType(resource_type)
    operation = Operation(operation)
    context = create_access_context(user, resource)
    resource_id = get_attribute(resource, "id")

    if not engine.can_perform_operation(context, resource_type, operation):
        _deny(engine, context, resource_type, operation, resource_id)

    if not gate.check_resource_access(resource, context.user_id, context.user_role, context.family_id):
        _deny(engine, context, resource_type, operation, resource_id, reason="resource not visible to user")

    _granted(context, resource_type, operation, resource_id)


def check_admin(user: Any) -> bool:
    return getattr(user, "role", None) == UserRole.ADMIN


def require_admin(user: Any):
    if not check_admin(user):
        raise ForbiddenException(detail="Access denied: Admin privileges required")


def require_family_admin(user: Any):
    if check_admin(user) or getattr(user, "family_role", None) in FAMILY_ADMIN_ROLES:
        return
    raise ForbiddenException(detail="Access denied: Family admin privileges required")


def check_family_access(user: Any, family_id: str) -> bool:
    """Admins can access every family, everyone else only their own"""
    if user is None:
        return False
    if check_admin(user):
        return True
    return bool(family_id) and getattr(user, "family_id", None) == family_id


def check_resource_ownership(user: Any, resource_owner_id: str) -> bool:
    """Admins pass, everyone else must own the resource"""
    if user is None:
        return False
    if check_admin(user):
        return True
    return getattr(user, "id", None) == resource_owner_id
