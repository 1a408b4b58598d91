"""
Tests that the committed migrations match the models.
"""

from io import StringIO

import pytest
from django.core.management import call_command


@pytest.mark.django_db
class TestMigrations:
    """Tests for model/migration drift."""

    def test_no_pending_model_changes(self):
        """
        Why it matters: a missing migration (a manager flag, a field
        default) only surfaces when someone runs makemigrations later.
        """
        out = StringIO()

        call_command("makemigrations", "--check", "--dry-run", stdout=out)

        assert "No changes detected" in out.getvalue()
