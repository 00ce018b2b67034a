import logging

from flask import Flask, jsonify, render_template, request
from flask_cors import CORS

import config
from analyzer import ANALYSIS_FAILED_MESSAGE, ExtractionRequest, analyze
from errors import AnalyzerError

config.configure_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)


def run_analysis(raw_input, input_type):
    """Return ``(payload, status)`` for one analyze call."""
    try:
        result = analyze(ExtractionRequest.from_payload(raw_input, input_type))
    except AnalyzerError as e:
        logger.warning("Analyze request rejected (%s): %s", e.status_code, e.message)
        return {"error": e.message}, e.status_code
    except Exception:
        logger.exception("Unexpected analysis error")
        return {"error": ANALYSIS_FAILED_MESSAGE}, 500
    return result.to_dict(), 200


# ————— Flask Routes —————
@app.route("/", methods=["GET"])
def home():
    return render_template("index.html")


@app.route("/api/analyze", methods=["POST"])
def analyze_api():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    payload, status = run_analysis(body.get("input"), body.get("inputType"))
    return jsonify(payload), status


@app.route("/analyze", methods=["POST"])
def analyze_form():
    raw_input = request.form.get("input", "")
    input_type = request.form.get("inputType", "text")
    payload, status = run_analysis(raw_input, input_type)
    return render_template(
        "index.html",
        result=payload.get("html"),
        error=payload.get("error"),
        input=raw_input,
        input_type=input_type,
    ), status


if __name__ == "__main__":
    # Set debug=True for development; set to False in production
    app.run(debug=True)
