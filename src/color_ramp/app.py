from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request

from .blending import BLEND_MODES
from .colorspace import ParseError, parse
from .config import ColorRampConfig
from .contrast import color_delta_e, get_wcag_passing_levels, round2, wcag_contrast_ratio
from .engine import generate
from .interpolation import SCALE_TYPES
from .oklch import generate_linear_space
from .validation import validate_hex_value, validate_hsl_values, validate_oklch_values

log = logging.getLogger(__name__)

MIX_MODES = ("oklch", "lab", "rgb")

DEFAULT_SETTINGS: Mapping[str, Any] = {
    "RAMP_MAX_STEPS": 512,
}


def parse_steps(val: str | None, default: int, limit: int) -> int:
    n = int(val) if val is not None else default
    return max(1, min(n, limit))


def parse_mix_mode(val: str | None) -> str:
    m = (val or "oklch").strip().lower()
    return m if m in MIX_MODES else "oklch"


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_SETTINGS)
    if config:
        app.config.update(config)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    @app.route("/ramp", methods=["POST"])
    def ramp():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "expected a JSON object"}), 400
        try:
            cfg = ColorRampConfig.from_dict(data)
        except (ValueError, TypeError, AttributeError) as exc:
            return jsonify({"error": f"invalid ramp: {exc}"}), 400

        limit = app.config["RAMP_MAX_STEPS"]
        if cfg.total_steps > limit:
            return jsonify({"error": f"totalSteps must be ≤ {limit}"}), 400
        try:
            colors = generate(cfg)
        except Exception as exc:
            log.exception("Ramp generation failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(colors)

    @app.route("/blend-modes")
    def blend_modes():
        return jsonify(list(BLEND_MODES))

    @app.route("/scale-types")
    def scale_types():
        return jsonify(list(SCALE_TYPES))

    @app.route("/validate/hex")
    def validate_hex():
        return jsonify(validate_hex_value(request.args.get("value", "")).to_dict())

    @app.route("/validate/hsl")
    def validate_hsl():
        args = request.args
        result = validate_hsl_values(args.get("h", ""), args.get("s", ""), args.get("l", ""))
        return jsonify(result.to_dict())

    @app.route("/validate/oklch")
    def validate_oklch():
        args = request.args
        result = validate_oklch_values(args.get("l", ""), args.get("c", ""), args.get("h", ""))
        return jsonify(result.to_dict())

    @app.route("/mix")
    def mix():
        a = request.args.get("a", "#ff0000")
        b = request.args.get("b", "#0000ff")
        mode = parse_mix_mode(request.args.get("mode"))
        try:
            n = parse_steps(request.args.get("n"), 11, app.config["RAMP_MAX_STEPS"])
        except ValueError:
            return jsonify({"error": "n must be an integer"}), 400
        try:
            parse(a)
            parse(b)
        except ParseError as exc:
            return jsonify({"error": f"invalid color: {exc}"}), 400
        try:
            palette = generate_linear_space(a, b, n, mode)
        except Exception as exc:
            log.exception("Interpolation failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(palette)

    @app.route("/contrast")
    def contrast():
        fg = request.args.get("fg", "#000000")
        bg = request.args.get("bg", "#ffffff")
        try:
            ratio = wcag_contrast_ratio(fg, bg)
            delta_e = color_delta_e(fg, bg)
        except ParseError as exc:
            return jsonify({"error": f"invalid color: {exc}"}), 400
        return jsonify(
            {
                "ratio": round2(ratio),
                "passes": [level.id for level in get_wcag_passing_levels(ratio)],
                "deltaE": round2(delta_e),
            }
        )

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
