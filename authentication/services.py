import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from .exceptions import NotFoundError, ValidationError
from .models import Role
from .permissions import require_admin

logger = logging.getLogger(__name__)

User = get_user_model()


def list_roles():
    return list(Role.objects.all())


def list_users_with_roles(actor):
    require_admin(actor, 'view user roles')
    return User.objects.select_related('role').order_by('id')


@transaction.atomic
def set_user_role(target_user_id, role_id, actor):
    """Reassign a user's role. Admin only."""
    require_admin(actor, 'change user roles')

    try:
        user = User.objects.select_for_update().get(pk=target_user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFoundError('User not found.')

    try:
        role = Role.objects.get(pk=role_id)
    except (Role.DoesNotExist, ValueError, TypeError):
        raise ValidationError({'role_id': ['The selected role is invalid.']})

    user.role = role
    user.save(update_fields=['role'])
    logger.info("User %s role set to %s by %s", user.pk, role.name, actor.pk)
    return user
