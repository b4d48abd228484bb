"""
/api/verify endpoint tests
"""
import pytest

from totp_backend import routes
from totp_backend.routes import MSG_INVALID, MSG_VALID
from totp_core.errors import InvalidConfiguration

DEMO_SECRET = "JBSWY3DPEHPK3PXP"


def _verify(client, **body):
    return client.post("/api/verify", json=body)


class TestVerifyDecision:

    def test_matching_token(self, client, frozen_time):
        frozen_time(59)
        res = _verify(client, token="996554", secret=DEMO_SECRET, step=30, algorithm="sha1", digits=6)
        assert res.status_code == 200
        assert res.get_json() == {"success": True, "message": MSG_VALID}

    def test_defaults_apply_when_fields_absent(self, client, frozen_time):
        frozen_time(59)
        res = _verify(client, token="996554", secret=DEMO_SECRET)
        assert res.status_code == 200
        assert res.get_json()["success"] is True

    def test_non_matching_token_is_200_false(self, client, frozen_time):
        frozen_time(59)
        res = _verify(client, token="000000", secret=DEMO_SECRET)
        assert res.status_code == 200
        data = res.get_json()
        assert data == {"success": False, "message": MSG_INVALID}

    def test_adjacent_step_rejected(self, client, frozen_time):
        frozen_time(59)
        res = _verify(client, token="282760", secret=DEMO_SECRET)
        assert res.get_json()["success"] is False

    def test_string_parameters_are_accepted(self, client, frozen_time):
        frozen_time(59)
        res = _verify(client, token="344551", secret="jbswy3dpehpk3pxp", step="30", algorithm="sha256", digits="6")
        assert res.status_code == 200
        assert res.get_json()["success"] is True

    def test_ten_digit_token(self, client, frozen_time):
        frozen_time(59)
        res = _verify(client, token="0436344551", secret=DEMO_SECRET, algorithm="sha256", digits=10)
        assert res.get_json()["success"] is True


class TestVerifyValidation:

    def test_missing_secret(self, client):
        res = _verify(client, token="123456")
        assert res.status_code == 400
        data = res.get_json()
        assert data["success"] is False
        assert any("secret" in error for error in data["errors"])

    def test_every_bad_field_reported(self, client):
        res = _verify(client, token="abc", secret="  ", step=4, algorithm="md5", digits=11)
        assert res.status_code == 400
        errors = res.get_json()["errors"]
        assert len(errors) == 5
        assert errors[2] == "step must be an integer between 5 and 300"
        assert errors[3] == "algorithm must be one of: sha1, sha256, sha512"

    @pytest.mark.parametrize("step, status", [(4, 400), (5, 200), (300, 200), (301, 400)])
    def test_step_boundaries(self, client, frozen_time, step, status):
        res = _verify(client, token="123456", secret=DEMO_SECRET, step=step)
        assert res.status_code == status

    def test_token_width_must_match_digits(self, client):
        res = _verify(client, token="123456", secret=DEMO_SECRET, digits=8)
        assert res.status_code == 400
        assert res.get_json()["errors"] == ["token must be exactly 8 digits"]

    def test_malformed_base32_secret(self, client):
        res = _verify(client, token="123456", secret="NOT*BASE32")
        assert res.status_code == 400
        errors = res.get_json()["errors"]
        assert len(errors) == 1
        assert errors[0].startswith("secret")

    def test_body_that_is_not_json(self, client):
        res = client.post("/api/verify", data="token=123456", content_type="text/plain")
        assert res.status_code == 400
        assert "token is required" in res.get_json()["errors"]

    def test_json_array_body(self, client):
        res = client.post("/api/verify", json=["123456"])
        assert res.status_code == 400


class TestVerifyFaults:

    def test_generation_error_is_500_not_a_mismatch(self, client, monkeypatch):
        def broken_check(*args, **kwargs):
            raise InvalidConfiguration("digest failure")

        monkeypatch.setattr(routes, "check", broken_check)
        res = _verify(client, token="123456", secret=DEMO_SECRET)
        assert res.status_code == 500
        data = res.get_json()
        assert data["success"] is False
        assert data["error"] == "digest failure"

    def test_unexpected_error_is_500(self, client, monkeypatch):
        def broken_check(*args, **kwargs):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(routes, "check", broken_check)
        res = _verify(client, token="123456", secret=DEMO_SECRET)
        assert res.status_code == 500
        assert res.get_json()["error"] == "kaboom"

    def test_production_hides_error_detail(self, app, monkeypatch):
        app.config["APP_ENV"] = "production"

        def broken_check(*args, **kwargs):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(routes, "check", broken_check)
        res = app.test_client().post("/api/verify", json={"token": "123456", "secret": DEMO_SECRET})
        assert res.status_code == 500
        assert "error" not in res.get_json()

    def test_window_radius_setting(self, app, frozen_time):
        frozen_time(59)
        app.config["WINDOW_RADIUS"] = 1
        res = app.test_client().post("/api/verify", json={"token": "282760", "secret": DEMO_SECRET})
        assert res.get_json()["success"] is True


@pytest.mark.parametrize("secret", ["=", "========", " == "])
def test_padding_only_secret_is_a_field_error(client, secret):
    res = _verify(client, token="123456", secret=secret)
    assert res.status_code == 400
    assert res.get_json()["errors"] == ["secret must not be empty"]
