"""Unit tests for roles and capability checks."""

import pytest

from jobcard.domain.exceptions import NotAuthorizedError, ValidationError
from jobcard.domain.model.user import Capability, Role, User, require_capability


class TestCapabilities:

    def test_mechanic_performs_jobs(self):
        assert User("m1", "Mia", Role.MECHANIC).can(Capability.PERFORM_JOBS)

    def test_manager_assigns_but_does_not_perform(self):
        manager = User("boss", "Sam", Role.MANAGER)
        assert manager.can(Capability.ASSIGN_JOBS)
        assert not manager.can(Capability.PERFORM_JOBS)

    def test_require_capability_rejects_customer(self):
        customer = User("c1", "Cal", Role.CUSTOMER)
        with pytest.raises(NotAuthorizedError, match="perform_jobs"):
            require_capability(customer, Capability.PERFORM_JOBS)


class TestRoleParse:

    def test_parse_is_case_insensitive(self):
        assert Role.parse(" Mechanic ") is Role.MECHANIC

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError, match="Unknown role"):
            Role.parse("janitor")
