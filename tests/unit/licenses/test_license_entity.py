"""
Unit tests for License domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import InvalidLicenseStateError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_license(**overrides):
    """Build a license valid for one year from NOW."""
    fields = {
        "license_key_id": uuid.uuid4(),
        "product_id": uuid.uuid4(),
        "starts_at": NOW,
        "expires_at": NOW + timedelta(days=365),
    }
    fields.update(overrides)
    return License.create(**fields)


class TestLicenseConstruction:
    """Tests for License construction."""

    def test_create_license(self):
        """Test creating a license entity."""
        license = make_license(seat_limit=3)

        assert license.status == LicenseStatus.VALID
        assert license.activated_at is None
        assert license.seat_limit == 3
        assert isinstance(license.id, uuid.UUID)

    @pytest.mark.parametrize("delta", [timedelta(0), timedelta(days=-1)])
    def test_expiry_must_follow_start(self, delta):
        """Test expires_at must be strictly after starts_at."""
        with pytest.raises(ValueError, match="after start"):
            make_license(expires_at=NOW + delta)

    def test_seat_limit_must_be_positive(self):
        """Test a zero seat limit is rejected."""
        with pytest.raises(ValueError, match="Seat limit"):
            make_license(seat_limit=0)


class TestIsValid:
    """Truth table for License.is_valid."""

    @pytest.mark.parametrize(
        "offset,expected",
        [
            (timedelta(seconds=-1), False),  # before start
            (timedelta(0), True),  # at start
            (timedelta(days=100), True),
            (timedelta(days=365), True),  # at expiry
            (timedelta(days=365, seconds=1), False),  # after expiry
        ],
    )
    def test_window(self, offset, expected):
        """Test the validity window is inclusive at both ends."""
        assert make_license().is_valid(NOW + offset) is expected

    @pytest.mark.parametrize("transition", ["suspend", "cancel", "mark_expired"])
    def test_non_valid_status_is_never_valid(self, transition):
        """Test only status valid can be valid."""
        license = getattr(make_license(), transition)()
        assert license.is_valid(NOW + timedelta(days=1)) is False

    def test_is_expired(self):
        """Test is_expired compares against expires_at."""
        license = make_license()
        assert not license.is_expired(NOW)
        assert license.is_expired(NOW + timedelta(days=366))


class TestStateMachine:
    """Tests for License status transitions."""

    def test_suspend_and_reactivate(self):
        """Test valid -> suspended -> valid."""
        suspended = make_license().suspend()
        assert suspended.status == LicenseStatus.SUSPENDED
        assert suspended.reactivate().status == LicenseStatus.VALID

    def test_suspend_suspended_fails(self):
        """Test suspending twice fails."""
        with pytest.raises(InvalidLicenseStateError):
            make_license().suspend().suspend()

    def test_reactivate_valid_fails(self):
        """Test reactivating a valid license fails."""
        with pytest.raises(InvalidLicenseStateError):
            make_license().reactivate()

    def test_cancel_from_valid_and_suspended(self):
        """Test cancel from valid and suspended."""
        assert make_license().cancel().status == LicenseStatus.CANCELLED
        assert make_license().suspend().cancel().status == LicenseStatus.CANCELLED

    def test_cancel_twice_fails(self):
        """Test cancelled is terminal for cancel."""
        with pytest.raises(InvalidLicenseStateError):
            make_license().cancel().cancel()

    def test_cancelled_cannot_be_suspended_or_reactivated(self):
        """Test cancelled licenses stay cancelled."""
        cancelled = make_license().cancel()
        with pytest.raises(InvalidLicenseStateError):
            cancelled.suspend()
        with pytest.raises(InvalidLicenseStateError):
            cancelled.reactivate()

    def test_mark_expired_from_any_status(self):
        """Test the sweep transition applies to every status."""
        for license in (make_license(), make_license().suspend(), make_license().cancel()):
            assert license.mark_expired().status == LicenseStatus.EXPIRED

    def test_transitions_return_new_instances(self):
        """Test the original entity is untouched."""
        license = make_license()
        license.suspend()
        assert license.status == LicenseStatus.VALID


class TestActivation:
    """Tests for one-shot activation."""

    def test_activate(self):
        """Test activation records the time."""
        activated = make_license().activate(NOW)

        assert activated.is_activated()
        assert activated.activated_at == NOW
        assert activated.status == LicenseStatus.VALID

    def test_activate_twice_fails(self):
        """Test a license can only be activated once."""
        activated = make_license().activate(NOW)

        assert not activated.can_activate()
        with pytest.raises(InvalidLicenseStateError):
            activated.activate(NOW + timedelta(hours=1))

        assert activated.activated_at == NOW

    def test_activate_suspended_fails(self):
        """Test only valid licenses can be activated."""
        with pytest.raises(InvalidLicenseStateError):
            make_license().suspend().activate(NOW)
