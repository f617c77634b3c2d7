"""
Health check - verify packages import and the app serves /health.
"""


def test_import_zealthy():
    """Test that zealthy package can be imported."""
    import zealthy
    assert zealthy.__version__ == "1.0.0"


def test_import_onboarding():
    """Test that onboarding exports its public pieces."""
    from onboarding import OnboardingSession, PageAssignments, validate_step
    assert OnboardingSession is not None
    assert PageAssignments is not None
    assert validate_step is not None


def test_settings_from_environment():
    from zealthy.config import get_settings

    settings = get_settings()
    assert settings.supabase_url.startswith("https://")
    assert settings.is_development


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
