"""Tests for the role gate and the principal it produces."""

import pytest
from rest_framework.test import APIRequestFactory

from apps.users.models import User
from apps.users.permissions import IsPlatformAdmin, IsTenant, IsVerifiedOwner, Principal
from shared.testing import make_admin, make_owner, make_tenant


def _request_for(user):
    request = APIRequestFactory().get("/")
    request.user = user
    return request


@pytest.mark.django_db
def test_principal_carries_user_id_and_role():
    tenant = make_tenant()

    principal = Principal.from_user(tenant)

    assert principal.user_id == tenant.pk
    assert principal.is_tenant
    assert not principal.is_owner


@pytest.mark.django_db
def test_superuser_is_treated_as_admin():
    user = User.objects.create_user(email="root@example.com", password="x", is_superuser=True)

    assert Principal.from_user(user).role == User.Role.ADMIN
    assert IsPlatformAdmin().has_permission(_request_for(user), None)


@pytest.mark.django_db
def test_pending_owner_fails_verified_owner_gate():
    pending = make_owner(email="pending@example.com", verified=False)
    approved = make_owner(email="approved@example.com")

    gate = IsVerifiedOwner()

    assert not gate.has_permission(_request_for(pending), None)
    assert gate.has_permission(_request_for(approved), None)


@pytest.mark.django_db
def test_inactive_user_is_rejected_by_every_gate():
    tenant = make_tenant()
    tenant.is_active = False

    assert not IsTenant().has_permission(_request_for(tenant), None)


@pytest.mark.django_db
def test_roles_do_not_cross():
    admin = make_admin()

    assert not IsTenant().has_permission(_request_for(admin), None)
