"""
Integration tests for API endpoints.
Tests the analyze -> generate -> audit -> feedback flow.
"""
from asset_factory.config.brand_schema import BRAND_TEMPLATE
from asset_factory.services.feedback_system import FeedbackStore, FeedbackSystem


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["services"]["asset_types"] == 20

    def test_api_info(self, client):
        """Test api info lists the generate endpoint."""
        response = client.get("/api/info")
        assert response.status_code == 200
        assert response.json()["endpoints"]["generate"]["asset"] == "POST /generate/asset"


class TestGenerateEndpoints:
    """Tests for analysis and generation endpoints."""

    def test_analyze(self, client, sample_content):
        """Test analyze returns roles in input order."""
        response = client.post("/generate/analyze", json={"content": sample_content})
        assert response.status_code == 200
        roles = [item["role"] for item in response.json()["items"]]
        assert roles == ["tag", "headline", "subhead", "cta"]

    def test_analyze_explicit_role(self, client):
        """Test an explicit role is kept with full confidence."""
        response = client.post("/generate/analyze", json={
            "content": [{"text": "Buy now", "role": "body"}]
        })
        item = response.json()["items"][0]
        assert item["role"] == "body"
        assert item["confidence"] == 1.0

    def test_analyze_invalid_role(self, client):
        """Test an unknown role is rejected."""
        response = client.post("/generate/analyze", json={
            "content": [{"text": "Buy now", "role": "footer"}]
        })
        assert response.status_code == 422

    def test_generate_asset(self, client, sample_content):
        """Test generating an asset returns the document and its audit."""
        response = client.post("/generate/asset", json={
            "asset_type": "announcement-hero",
            "content": sample_content,
            "theme": "dark"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["dimensions"] == {"width": 1200, "height": 675}
        assert data["document"]["id"] == data["node_id"]
        assert [c["name"] for c in data["document"]["children"]] == [
            "decorative", "branding", "content"
        ]
        assert data["audit_result"]["passed"] is True
        assert data["audit_result"]["score"] == 100

    def test_generate_small_asset_fails_audit(self, client, sample_content):
        """Test generate small asset fails audit."""
        response = client.post("/generate/asset", json={
            "asset_type": "banner-leaderboard",
            "content": sample_content
        })
        assert response.status_code == 200
        audit = response.json()["audit_result"]
        assert audit["passed"] is False
        assert audit["checks"][-1]["name"] == "Export Quality"

    def test_generate_unknown_type(self, client, sample_content):
        """Test generating an unknown asset type returns 404."""
        response = client.post("/generate/asset", json={
            "asset_type": "billboard",
            "content": sample_content
        })
        assert response.status_code == 404

    def test_generate_invalid_logo_placement(self, client, sample_content):
        """Test generate invalid logo placement."""
        response = client.post("/generate/asset", json={
            "asset_type": "twitter-post",
            "content": sample_content,
            "options": {"logo_placement": "middle"}
        })
        assert response.status_code == 422

    def test_generate_logo_placement_option(self, client, sample_content):
        """Test the logo placement option positions the branding group."""
        response = client.post("/generate/asset", json={
            "asset_type": "twitter-post",
            "content": sample_content,
            "options": {"logo_placement": "top-left"}
        })
        assert response.status_code == 200
        groups = {c["name"]: c for c in response.json()["document"]["children"]}
        assert (groups["branding"]["x"], groups["branding"]["y"]) == (24, 24)

    def test_batch_with_preset(self, client, sample_content):
        """Test batch merges preset types and reports per-type failures."""
        response = client.post("/generate/batch", json={
            "asset_types": ["billboard"],
            "preset": "email-kit",
            "content": sample_content
        })
        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["asset_type"] for r in results] == ["billboard", "email-header", "email-banner"]
        assert [r["success"] for r in results] == [False, True, True]
        assert "billboard" in results[0]["error"]

    def test_batch_unknown_preset(self, client, sample_content):
        """Test batch with an unknown preset returns 404."""
        response = client.post("/generate/batch", json={
            "preset": "everything",
            "content": sample_content
        })
        assert response.status_code == 404

    def test_asset_types(self, client):
        """Test listing asset types, presets and categories."""
        response = client.get("/generate/asset-types")
        assert response.status_code == 200
        data = response.json()
        assert len(data["asset_types"]) == 20
        assert "launch-pack" in data["presets"]
        assert "social" in data["categories"]


class TestAuditEndpoints:
    """Tests for audit endpoints."""

    def test_audit_generated_by_id(self, client, sample_content):
        """Test audit generated by id."""
        generated = client.post("/generate/asset", json={
            "asset_type": "twitter-post",
            "content": sample_content
        }).json()

        response = client.post("/audit/run", json={
            "node_ids": [generated["node_id"], "missing-id"]
        })
        assert response.status_code == 200
        data = response.json()
        assert len(data["results"]) == 1
        assert data["results"][0]["node_id"] == generated["node_id"]
        assert data["missing"] == ["missing-id"]

    def test_audit_posted_document(self, client):
        """Test auditing a posted document."""
        response = client.post("/audit/run", json={
            "documents": [{"kind": "FRAME", "name": "Tiny", "width": 500, "height": 150}]
        })
        result = response.json()["results"][0]
        assert result["passed"] is False
        assert len(result["checks"]) == 7

    def test_audit_nothing(self, client):
        """Test auditing with no input returns 400."""
        response = client.post("/audit/run", json={})
        assert response.status_code == 400

    def test_list_checks(self, client):
        """Test listing checks in run order."""
        response = client.get("/audit/checks")
        assert response.json()["checks"][0] == "Color Compliance"


class TestLayerEndpoints:
    """Tests for layer endpoints."""

    def test_normalize(self, client, messy_tree):
        """Test normalizing layers orders the root children."""
        response = client.post("/layers/normalize", json=messy_tree.model_dump(mode="json"))
        assert response.status_code == 200
        names = [c["name"] for c in response.json()["children"]]
        assert names == ["background", "decorative", "branding", "content", "Extra"]

    def test_validate(self, client, messy_tree):
        """Test validating layers reports missing required layers."""
        response = client.post("/layers/validate", json=messy_tree.model_dump(mode="json"))
        data = response.json()
        assert data["valid"] is False
        assert data["errors"] == ["Missing required layer: content"]

    def test_leaf_with_children_rejected(self, client):
        """Test leaf with children rejected."""
        response = client.post("/layers/validate", json={
            "kind": "TEXT",
            "children": [{"kind": "TEXT"}]
        })
        assert response.status_code == 422


class TestThemeEndpoints:
    """Tests for theme endpoints."""

    def test_list_themes(self, client):
        """Test listing themes in registry order."""
        response = client.get("/themes")
        assert [t["id"] for t in response.json()] == ["dark", "light", "bold", "minimal", "gradient"]

    def test_apply_theme(self, client, messy_tree):
        """Test applying a gradient theme to a document."""
        response = client.post("/themes/apply", json={
            "document": messy_tree.model_dump(mode="json"),
            "theme": "gradient"
        })
        assert response.status_code == 200
        assert response.json()["fills"][0]["type"] == "GRADIENT_LINEAR"

    def test_apply_unknown_theme(self, client, messy_tree):
        """Test an unknown theme leaves the document unchanged."""
        document = messy_tree.model_dump(mode="json")
        response = client.post("/themes/apply", json={
            "document": document,
            "theme": "neon"
        })
        assert response.status_code == 200
        assert response.json() == document


class TestBrandEndpoints:
    """Tests for brand configuration endpoints."""

    def test_template(self, client):
        """Test the brand template is served as YAML."""
        response = client.get("/brand/template")
        assert response.status_code == 200
        assert "brand:" in response.text

    def test_load_and_current(self, client):
        """Test loading a brand config makes it current."""
        response = client.post("/brand/load", json={"config_yaml": BRAND_TEMPLATE})
        assert response.status_code == 200
        assert response.json()["brand"] == "Your Company Name"

        current = client.get("/brand/current").json()
        assert current["config"]["colors"]["primary"] == "#FE621D"

    def test_loaded_brand_drives_palette(self, client):
        """Test loaded brand drives palette."""
        client.post("/brand/load", json={"config_yaml": BRAND_TEMPLATE})
        assert client.get("/themes/palette").json()["primary"] == "#FE621D"

    def test_load_invalid(self, client):
        """Test loading an invalid brand config returns its errors."""
        response = client.post("/brand/load", json={"config_yaml": "brand:\n  name: Acme\n"})
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert "colors section is required" in detail["errors"]

    def test_load_empty(self, client):
        """Test loading an empty brand config returns 400."""
        response = client.post("/brand/load", json={"config_yaml": ""})
        assert response.status_code == 400

    def test_validate(self, client):
        """Test validating a brand config without loading it."""
        response = client.post("/brand/validate", json={"config_yaml": "brand:\n  name: Acme\n"})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert "typography section is required" in data["errors"]

    def test_validate_bad_yaml(self, client):
        """Test validating malformed YAML reports an error."""
        response = client.post("/brand/validate", json={"config_yaml": "brand: [unclosed"})
        data = response.json()
        assert data["valid"] is False
        assert data["errors"][0].startswith("Invalid YAML")


class TestFeedbackEndpoints:
    """Tests for feedback endpoints."""

    def test_submit_and_summary(self, client, monkeypatch):
        """Test submitting feedback and reading the summary."""
        from asset_factory.routes import feedback
        monkeypatch.setattr(feedback, "feedback_system", FeedbackSystem(store=FeedbackStore()))

        response = client.post("/feedback/submit", json={
            "asset_id": "asset-1",
            "rating": 5,
            "outcome": "approved",
            "issues": [{"category": "logo", "severity": "minor", "description": "too small"}]
        })
        assert response.status_code == 200
        assert response.json()["reviewer"] == "Anonymous"

        summary = client.get("/feedback/summary", params={"days": 7}).json()
        assert summary["total_assets"] == 1
        assert summary["average_rating"] == 5
        assert summary["common_issues"] == [{"issue": "logo: too small", "count": 1}]

    def test_rating_out_of_range(self, client):
        """Test rating out of range."""
        response = client.post("/feedback/submit", json={
            "asset_id": "asset-1",
            "rating": 6,
            "outcome": "approved"
        })
        assert response.status_code == 422

    def test_summary_days_must_be_positive(self, client):
        """Test summary days must be positive."""
        response = client.get("/feedback/summary", params={"days": 0})
        assert response.status_code == 422

    def test_rating_scale(self, client):
        """Test the rating scale labels."""
        data = client.get("/feedback/rating-scale").json()
        assert data["labels"]["5"] == "Excellent"
