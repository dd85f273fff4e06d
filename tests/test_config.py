import os
import sys

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from photoloc.core.config import GPSConfig, ProjectionConfig, Settings, configs


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("GPS_EPS_M", "5.5")
    monkeypatch.setenv("REFERENCE_POLICY", "nearest")

    settings = Settings()

    assert settings.GPS_EPS_M == 5.5
    assert settings.REFERENCE_POLICY == "nearest"
    assert settings.model_config["env_file"] == ".env"


def test_job_configs_default_to_settings():
    assert GPSConfig().eps_m == configs.GPS_EPS_M
    assert GPSConfig().min_samples == configs.GPS_MIN_SAMPLES
    assert ProjectionConfig().reference_policy == configs.REFERENCE_POLICY
