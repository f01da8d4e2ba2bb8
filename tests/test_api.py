"""
Quotation API tests.

Tests:
1-2.  Health and opening a quotation
3-6.  Panel add / update / remove
7-8.  Active panel
9-11. Preview (JSON + SVG), overflowing dimensions
12-13. CSV and PDF downloads
14.   Unknown quotation
"""


def _set(client, qid, panel_id, field, value):
    resp = client.patch(f"/api/quotations/{qid}/panels/{panel_id}", json={"field": field, "value": value})
    assert resp.status_code == 200
    return resp.json()


def _first_panel_id(client, qid):
    return client.get(f"/api/quotations/{qid}").json()["panels"][0]["id"]


# ============================================================
# 1-2. Health and opening
# ============================================================

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_open_quotation_has_one_active_panel(client):
    resp = client.post("/api/quotations")
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["panels"]) == 1
    assert data["active_panel_id"] == data["panels"][0]["id"]
    assert data["panels"][0]["label"] == "Worktop #1"
    assert data["grand_totals"]["excl_tax_display"] == "0.00"


# ============================================================
# 3-6. Panels
# ============================================================

def test_update_fields_prices_panel(client, quotation_id):
    panel_id = _first_panel_id(client, quotation_id)
    _set(client, quotation_id, panel_id, "length_cm", "200")
    data = _set(client, quotation_id, panel_id, "width_cm", "60")
    panel = data["panels"][0]
    assert panel["display"]["area_m2"] == "1.20"
    assert panel["display"]["perimeter_m"] == "5.20"
    assert panel["display"]["panel_cost_excl_tax"] == "130.56"
    assert panel["display"]["edge_cost_excl_tax"] == "18.20"
    assert panel["display"]["total_excl_tax"] == "148.76"
    assert data["grand_totals"]["excl_tax_display"] == "148.76"
    assert data["grand_totals"]["incl_tax_display"] == "177.02"


def test_add_panel_keeps_totals_and_activates(client, quotation_id):
    panel_id = _first_panel_id(client, quotation_id)
    _set(client, quotation_id, panel_id, "length_cm", "200")
    _set(client, quotation_id, panel_id, "width_cm", "60")
    data = client.post(f"/api/quotations/{quotation_id}/panels").json()
    assert len(data["panels"]) == 2
    assert data["active_panel_id"] == data["panels"][1]["id"]
    assert data["grand_totals"]["excl_tax_display"] == "148.76"


def test_invalid_field_is_400(client, quotation_id):
    panel_id = _first_panel_id(client, quotation_id)
    resp = client.patch(f"/api/quotations/{quotation_id}/panels/{panel_id}",
                        json={"field": "colour", "value": "black"})
    assert resp.status_code == 400
    resp = client.patch(f"/api/quotations/{quotation_id}/panels/{panel_id}",
                        json={"field": "has_inner_edging", "value": "sometimes"})
    assert resp.status_code == 400


def test_unknown_panel_update_and_remove_are_noops(client, quotation_id):
    resp = client.patch(f"/api/quotations/{quotation_id}/panels/9999",
                        json={"field": "length_cm", "value": "100"})
    assert resp.status_code == 200
    assert resp.json()["panels"][0]["fields"]["length_cm"] == ""
    resp = client.delete(f"/api/quotations/{quotation_id}/panels/9999")
    assert resp.status_code == 200
    assert len(resp.json()["panels"]) == 1


def test_remove_active_panel_selects_first(client, quotation_id):
    first = _first_panel_id(client, quotation_id)
    second = client.post(f"/api/quotations/{quotation_id}/panels").json()["active_panel_id"]
    data = client.delete(f"/api/quotations/{quotation_id}/panels/{second}").json()
    assert data["active_panel_id"] == first
    data = client.delete(f"/api/quotations/{quotation_id}/panels/{first}").json()
    assert data["active_panel_id"] is None
    assert data["panels"] == []


# ============================================================
# 7-8. Active panel
# ============================================================

def test_collapse_and_expand(client, quotation_id):
    panel_id = _first_panel_id(client, quotation_id)
    data = client.put(f"/api/quotations/{quotation_id}/active", json={"panel_id": None}).json()
    assert data["active_panel_id"] is None
    data = client.put(f"/api/quotations/{quotation_id}/active", json={"panel_id": panel_id}).json()
    assert data["active_panel_id"] == panel_id


def test_preview_without_selection(client, quotation_id):
    client.put(f"/api/quotations/{quotation_id}/active", json={"panel_id": None})
    data = client.get(f"/api/quotations/{quotation_id}/preview").json()
    assert data == {"renderable": False, "message": "Select a worktop"}


# ============================================================
# 9-11. Preview
# ============================================================

def test_preview_without_dimensions(client, quotation_id):
    data = client.get(f"/api/quotations/{quotation_id}/preview").json()
    assert data == {"renderable": False, "message": "No dimensions"}


def test_preview_geometry(client, quotation_id):
    panel_id = _first_panel_id(client, quotation_id)
    _set(client, quotation_id, panel_id, "length_cm", "200")
    _set(client, quotation_id, panel_id, "width_cm", "100")
    data = client.get(f"/api/quotations/{quotation_id}/preview").json()
    assert data["renderable"] is True
    top = [[round(x, 1), round(y, 1)] for x, y in data["top"]]
    assert top == [[0.0, 0.0], [173.2, 100.0], [86.6, 150.0], [-86.6, 50.0]]
    assert data["inner"] is None


def test_preview_svg(client, quotation_id):
    panel_id = _first_panel_id(client, quotation_id)
    resp = client.get(f"/api/quotations/{quotation_id}/preview.svg")
    assert resp.status_code == 200
    assert "No dimensions" in resp.text
    _set(client, quotation_id, panel_id, "length_cm", "200")
    _set(client, quotation_id, panel_id, "width_cm", "100")
    resp = client.get(f"/api/quotations/{quotation_id}/preview.svg", params={"panel_id": panel_id})
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert "<polygon" in resp.text
    resp = client.get(f"/api/quotations/{quotation_id}/preview", params={"panel_id": 9999})
    assert resp.status_code == 404


def test_overflowing_dimensions_keep_view_and_preview_finite(client, quotation_id):
    """Text like "1e308" is valid input: it prices and previews without an error."""
    panel_id = _first_panel_id(client, quotation_id)
    _set(client, quotation_id, panel_id, "length_cm", "1e308")
    data = _set(client, quotation_id, panel_id, "width_cm", "1e308")
    assert data["grand_totals"]["incl_tax_display"] == "0.00"
    assert "inf" not in data["panels"][0]["display"]["total_excl_tax"]

    resp = client.get(f"/api/quotations/{quotation_id}/preview")
    assert resp.status_code == 200
    assert resp.json()["renderable"] is True
    assert client.get(f"/api/quotations/{quotation_id}/preview.svg").status_code == 200
    assert "inf" not in client.get(f"/api/quotations/{quotation_id}/csv").text


# ============================================================
# 12-13. Downloads
# ============================================================

def test_csv_download(client, quotation_id):
    panel_id = _first_panel_id(client, quotation_id)
    _set(client, quotation_id, panel_id, "length_cm", "200")
    _set(client, quotation_id, panel_id, "width_cm", "60")
    resp = client.get(f"/api/quotations/{quotation_id}/csv")
    assert resp.status_code == 200
    assert "worktop_quotes.csv" in resp.headers["content-disposition"]
    assert "worktop1,200,60,148.76,177.02" in resp.text


def test_pdf_download(client, quotation_id):
    resp = client.get(f"/api/quotations/{quotation_id}/pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content[:5] == b"%PDF-"


def test_export_records(client, quotation_id):
    data = client.get(f"/api/quotations/{quotation_id}/export").json()
    assert data["rows"][0]["label"] == "worktop1"
    assert data["grand_total"] == {"excl_tax": "0.00", "incl_tax": "0.00"}


# ============================================================
# 14. Unknown quotation
# ============================================================

def test_unknown_quotation_is_404(client):
    assert client.get("/api/quotations/nope").status_code == 404
    assert client.post("/api/quotations/nope/panels").status_code == 404
    assert client.get("/api/quotations/nope/csv").status_code == 404
