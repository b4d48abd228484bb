"""
TOTP VERIFICATION API ROUTES - FLASK BLUEPRINT

The client sends the code it shows plus the parameters used to produce it;
the server recomputes the code with its own clock and answers pass / fail.

    curl -X POST http://localhost:3001/api/verify -H "Content-Type: application/json" \
         -d '{"token": "123456", "secret": "JBSWY3DPEHPK3PXP", "step": 30, "algorithm": "sha1", "digits": 6}'

Status codes:
    200  a decision was reached (success true or false)
    400  parameter validation failed, `errors` lists every bad field
    500  unexpected fault (detail only outside production)
"""

from flask import Blueprint, current_app, jsonify, request

from totp_core import secret_codec
from totp_core.configuration import Configuration, coerce_int
from totp_core.display import frame_at
from totp_core.errors import FormatError, GenerationError
from totp_core.provisioning import format_otpauth_uri
from totp_core.validator import validate, validate_configuration, validate_secret
from totp_core.verifier import check

totp_bp = Blueprint('totp', __name__, url_prefix='/api')

MSG_VALID = "Verification passed! The code is valid."
MSG_INVALID = "Verification failed! The code is invalid or has expired."
MSG_BAD_PARAMS = "Parameter validation failed"
MSG_INTERNAL = "Internal server error"


def validation_failed(errors):
    return jsonify({
        "success": False,
        "message": MSG_BAD_PARAMS,
        "errors": errors,
    }), 400


def internal_error(error):
    """500 body; the exception text is only exposed outside production."""
    body = {"success": False, "message": MSG_INTERNAL}
    if current_app.config.get("APP_ENV") != "production":
        body["error"] = str(error)
    return jsonify(body), 500


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _decode_secret(secret: str):
    """(key, errors) - a Base32 problem is reported like any other field error."""
    try:
        key = secret_codec.decode(secret)
    except FormatError as e:
        return None, [str(e)]
    if not key:
        # e.g. "====": padding only, nothing to sign with
        return None, ["secret must not be empty"]
    return key, []


@totp_bp.route('/verify', methods=['POST'])
def verify():
    """
    VERIFY A TOTP CODE

    Input (JSON body):
      {
        "token": "123456",              # required, exactly `digits` digits
        "secret": "JBSWY3DPEHPK3PXP",   # required, Base32
        "step": 30,                     # optional, 5-300
        "algorithm": "sha1",            # optional, sha1 | sha256 | sha512
        "digits": 6                     # optional, 6-10
      }

    Output:
      {"success": true, "message": "..."}  or  {"success": false, "message": "..."}
    """
    data = _json_body()
    token = data.get('token')
    secret = data.get('secret')
    step = data.get('step')
    algorithm = data.get('algorithm')
    digits = data.get('digits')

    # never log the secret or the submitted code
    current_app.logger.info("Verification request: step=%s algorithm=%s digits=%s", step, algorithm, digits)

    errors = validate(token, secret, step, algorithm, digits)
    if errors:
        current_app.logger.info("Verification rejected: %s", errors)
        return validation_failed(errors)

    configuration = Configuration.from_params(step, algorithm, digits)
    key, errors = _decode_secret(secret)
    if errors:
        return validation_failed(errors)

    try:
        is_valid = check(token, key, configuration, current_app.config.get("WINDOW_RADIUS", 0))
    except GenerationError as e:
        current_app.logger.error("Verification could not be evaluated: %s", e)
        return internal_error(e)

    if is_valid:
        current_app.logger.info("Verification passed")
        return jsonify({"success": True, "message": MSG_VALID})
    current_app.logger.info("Verification failed")
    return jsonify({"success": False, "message": MSG_INVALID})


@totp_bp.route('/secret', methods=['GET'])
def new_secret():
    """
    NEW RANDOM SECRET (session start / rotation)

      curl http://localhost:3001/api/secret
      curl "http://localhost:3001/api/secret?bytes=32"
    """
    length = coerce_int(request.args.get('bytes', secret_codec.SECRET_BYTES))
    if length is None or not secret_codec.MIN_SECRET_BYTES <= length <= secret_codec.MAX_SECRET_BYTES:
        return validation_failed([
            f"bytes must be an integer between {secret_codec.MIN_SECRET_BYTES} "
            f"and {secret_codec.MAX_SECRET_BYTES}"
        ])
    return jsonify({"secret": secret_codec.generate_base32_secret(length)})


@totp_bp.route('/otpauth_uri', methods=['GET'])
def otpauth_uri():
    """
    PROVISIONING URI FOR AUTHENTICATOR APPS

      curl "http://localhost:3001/api/otpauth_uri?secret=JBSWY3DPEHPK3PXP&account=alice@example.com"

    Query: secret (required), account, issuer, step, algorithm, digits
    """
    secret = request.args.get('secret')
    step = request.args.get('step')
    algorithm = request.args.get('algorithm')
    digits = request.args.get('digits')

    errors = validate_secret(secret) + validate_configuration(step, algorithm, digits)
    if errors:
        return validation_failed(errors)
    key, errors = _decode_secret(secret)
    if errors:
        return validation_failed(errors)

    uri = format_otpauth_uri(
        key,
        account=request.args.get('account', current_app.config["ACCOUNT"]),
        issuer=request.args.get('issuer', current_app.config["ISSUER"]),
        configuration=Configuration.from_params(step, algorithm, digits),
    )
    return jsonify({"uri": uri})


@totp_bp.route('/totp', methods=['POST'])
def current_code():
    """
    CURRENT CODE FOR A SECRET (live demo frame)

      curl -X POST http://localhost:3001/api/totp -H "Content-Type: application/json" \
           -d '{"secret": "JBSWY3DPEHPK3PXP"}'

    Output: {"code": "...", "remaining": 17, "progress": 0.566, "counter": 58000000}
    """
    data = _json_body()
    secret = data.get('secret')
    step = data.get('step')
    algorithm = data.get('algorithm')
    digits = data.get('digits')

    errors = validate_secret(secret) + validate_configuration(step, algorithm, digits)
    if errors:
        return validation_failed(errors)
    key, errors = _decode_secret(secret)
    if errors:
        return validation_failed(errors)

    frame = frame_at(key, Configuration.from_params(step, algorithm, digits))
    if not frame.available:
        return internal_error("code unavailable for this configuration")
    return jsonify(frame._asdict())


@totp_bp.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})
