"""
API integration tests for palette endpoints.

Tests the complete palette API:
- extraction from uploaded images
- harmony generation from a base color or palette
- color info and export endpoints
- parameter validation and error handling
"""

import base64
import json

import numpy as np
import pytest


class TestExtractEndpoint:
    """Test the /v1/palette/extract endpoint"""

    def upload(self, client, png_bytes, **params):
        return client.post(
            "/v1/palette/extract",
            params=params,
            files={"file": ("image.png", png_bytes, "image/png")}
        )

    def test_extract_split_image(self, test_client, encode_png, split_image):
        response = self.upload(test_client, encode_png(split_image), count=2)

        assert response.status_code == 200
        data = response.json()

        assert data["width"] == 300
        assert data["height"] == 150
        assert data["count"] == 2
        assert set(data["palette"]) == {"#ff0000", "#0000ff"}
        assert len(data["counts"]) == 2
        assert data["counts"][0] >= data["counts"][1]
        assert data["sampled_pixels"] == 300 * 150 // 4
        assert data["swatch_png_b64"] is None

    def test_extract_default_count(self, test_client, encode_png, split_image):
        data = self.upload(test_client, encode_png(split_image)).json()
        assert data["count"] == 5
        assert len(data["palette"]) <= 5

    def test_extract_single_color_not_padded(self, test_client, encode_png):
        img = np.full((20, 20, 3), (40, 40, 40), dtype=np.uint8)
        data = self.upload(test_client, encode_png(img), count=5).json()

        assert data["palette"] == ["#202020"]
        assert data["distinct_colors"] == 1

    def test_extract_with_swatch(self, test_client, encode_png, split_image):
        data = self.upload(test_client, encode_png(split_image), count=2, include_swatch=True).json()

        raw = base64.b64decode(data["swatch_png_b64"])
        assert raw.startswith(b"\x89PNG")

    @pytest.mark.parametrize("count", [1, 11, 0])
    def test_extract_count_out_of_range(self, test_client, encode_png, split_image, count):
        response = self.upload(test_client, encode_png(split_image), count=count)
        assert response.status_code == 422

    def test_extract_unsupported_media_type(self, test_client):
        response = test_client.post(
            "/v1/palette/extract",
            files={"file": ("notes.txt", b"just some text here", "text/plain")}
        )
        assert response.status_code == 415

    def test_extract_bad_magic_bytes(self, test_client):
        response = self.upload(test_client, b"definitely not a png file")
        assert response.status_code == 400

    def test_extract_corrupt_png(self, test_client):
        response = self.upload(test_client, b"\x89PNG\r\n\x1a\n" + b"\x00" * 64)
        assert response.status_code == 400
        assert "decode" in response.json()["detail"].lower()

    def test_extract_missing_file(self, test_client):
        response = test_client.post("/v1/palette/extract")
        assert response.status_code == 422

    def test_extract_records_metrics(self, test_client, encode_png, split_image):
        self.upload(test_client, encode_png(split_image), count=2)

        summary = test_client.get("/metrics").json()
        assert summary["counters"]["extract_requests_total"] == 1
        assert summary["palette_size_stats"]["count"] == 1


class TestHarmonyEndpoint:
    """Test the /v1/palette/harmony endpoint"""

    @pytest.mark.parametrize("kind", ["analogous", "complementary", "triadic", "monochrome"])
    def test_harmony_from_base(self, test_client, kind):
        response = test_client.post(
            "/v1/palette/harmony",
            json={"base_hex": "#4F8CFF", "kind": kind}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["base_hex"] == "#4f8cff"
        assert data["kind"] == kind
        assert len(data["palette"]) == 5

    def test_harmony_uses_first_swatch(self, test_client):
        response = test_client.post(
            "/v1/palette/harmony",
            json={"palette": ["#ff0000", "#00ff00", "#0000ff"], "kind": "triadic"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["base_hex"] == "#ff0000"
        assert data["palette"][:3] == ["#ff0000", "#00ff00", "#0000ff"]

    def test_harmony_with_swatch(self, test_client):
        response = test_client.post(
            "/v1/palette/harmony",
            params={"include_swatch": True},
            json={"base_hex": "#4f8cff", "kind": "monochrome"}
        )
        assert response.json()["swatch_png_b64"]

    def test_harmony_requires_a_base(self, test_client):
        response = test_client.post("/v1/palette/harmony", json={"kind": "triadic"})
        assert response.status_code == 422

    def test_harmony_rejects_both_sources(self, test_client):
        response = test_client.post(
            "/v1/palette/harmony",
            json={"base_hex": "#ff0000", "palette": ["#00ff00"], "kind": "triadic"}
        )
        assert response.status_code == 422

    def test_harmony_unknown_kind(self, test_client):
        response = test_client.post(
            "/v1/palette/harmony",
            json={"base_hex": "#ff0000", "kind": "tetradic"}
        )
        assert response.status_code == 422

    def test_harmony_malformed_base_pattern(self, test_client):
        response = test_client.post(
            "/v1/palette/harmony",
            json={"base_hex": "#ff00", "kind": "analogous"}
        )
        assert response.status_code == 422

    def test_harmony_malformed_palette_entry(self, test_client):
        response = test_client.post(
            "/v1/palette/harmony",
            json={"palette": ["red"], "kind": "analogous"}
        )
        assert response.status_code == 400
        assert "invalid hex color" in response.json()["detail"].lower()

        counters = test_client.get("/metrics").json()["counters"]
        assert counters["harmony_failed_total_InvalidInputError"] == 1


class TestColorInfoEndpoint:
    """Test the /v1/colors/{hex} endpoint"""

    def test_color_info(self, test_client):
        response = test_client.get("/v1/colors/4F8CFF")

        assert response.status_code == 200
        data = response.json()
        assert data["hex"] == "#4f8cff"
        assert data["rgb"] == [79, 140, 255]
        h, s, l = data["hsl"]
        assert 215 < h < 225
        assert s == pytest.approx(100.0)

    def test_color_info_invalid(self, test_client):
        response = test_client.get("/v1/colors/zzzzzz")
        assert response.status_code == 400


class TestExportEndpoints:
    """Test the palette export endpoints"""

    def test_export_css(self, test_client):
        response = test_client.post(
            "/v1/palette/export/css",
            json={"palette": ["#4f8cff", "#FF6F61"]}
        )

        assert response.status_code == 200
        assert response.json()["css"] == "--color-1: #4f8cff;\n--color-2: #ff6f61;"

    def test_export_json(self, test_client):
        response = test_client.post(
            "/v1/palette/export/json",
            json={"palette": ["#4f8cff", "#ff6f61"]}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert "color-palette.json" in response.headers["content-disposition"]
        assert json.loads(response.text) == ["#4f8cff", "#ff6f61"]

    def test_export_empty_palette(self, test_client):
        response = test_client.post("/v1/palette/export/json", json={"palette": []})
        assert response.status_code == 422

    def test_export_malformed_color(self, test_client):
        response = test_client.post("/v1/palette/export/css", json={"palette": ["#4f8cff", "oops"]})
        assert response.status_code == 400
