import math


def test_create_then_get_returns_same_fields(products_api, make_product):
    created = make_product(nombre="Teclado", descripcion="USB", categoria="Perifericos",
                           imagen="http://img.test/k.png", precio=25.5, stock=7)
    res = products_api.get(f"/api/productos/{created['id']}")
    assert res.status_code == 200
    body = res.json()
    assert body == created
    assert body["nombre"] == "Teclado"
    assert body["precio"] == 25.5
    assert body["stock"] == 7
    assert body["imagen"] == "http://img.test/k.png"


def test_create_sets_location_header(products_api):
    res = products_api.post("/api/productos", json={"nombre": "Cable", "precio": 3, "stock": 1})
    assert res.status_code == 201
    assert res.headers["location"].endswith(f"/api/productos/{res.json()['id']}")


def test_create_accepts_english_field_names(products_api):
    res = products_api.post(
        "/api/productos", json={"name": "Monitor", "price": 150, "stock": 2, "category": "Pantallas"}
    )
    assert res.status_code == 201
    assert res.json()["nombre"] == "Monitor"
    assert res.json()["categoria"] == "Pantallas"


def test_name_uniqueness_is_case_insensitive(products_api, make_product):
    make_product(nombre="Mouse")
    res = products_api.post("/api/productos", json={"nombre": "mouse", "precio": 5, "stock": 1})
    assert res.status_code == 400
    assert "already exists" in res.text


def test_create_validation_errors_are_plain_text(products_api):
    res = products_api.post("/api/productos", json={"nombre": "  ", "precio": 5, "stock": 1})
    assert res.status_code == 400
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text == "Product name is required"

    res = products_api.post("/api/productos", json={"nombre": "X", "precio": 0, "stock": 1})
    assert res.status_code == 400
    assert "Price" in res.text

    res = products_api.post("/api/productos", json={"nombre": "X", "precio": 1, "stock": -1})
    assert res.status_code == 400
    assert "Stock" in res.text


def test_malformed_body_is_400(products_api):
    res = products_api.post("/api/productos", json={"nombre": "X", "precio": "abc"})
    assert res.status_code == 400
    assert res.text.startswith("Invalid request")


def test_get_missing_product_is_404(products_api):
    res = products_api.get("/api/productos/999")
    assert res.status_code == 404
    assert res.text == "Product not found"


def test_update_replaces_all_fields(products_api, make_product):
    p = make_product(nombre="Silla", descripcion="old", categoria="Muebles", precio=40, stock=3)
    res = products_api.put(
        f"/api/productos/{p['id']}",
        json={"id": p["id"], "nombre": "Silla Pro", "precio": 55, "stock": 9},
    )
    assert res.status_code == 204
    body = products_api.get(f"/api/productos/{p['id']}").json()
    assert body["nombre"] == "Silla Pro"
    assert body["precio"] == 55
    assert body["stock"] == 9
    # full replace: omitted optional fields are cleared
    assert body["descripcion"] is None
    assert body["categoria"] is None


def test_update_keeps_own_name_but_rejects_other(products_api, make_product):
    a = make_product(nombre="Mesa")
    make_product(nombre="Lampara")
    res = products_api.put(f"/api/productos/{a['id']}", json={"nombre": "MESA", "precio": 10, "stock": 1})
    assert res.status_code == 204
    res = products_api.put(f"/api/productos/{a['id']}", json={"nombre": "lampara", "precio": 10, "stock": 1})
    assert res.status_code == 400
    assert "Another product" in res.text


def test_update_missing_and_id_mismatch(products_api, make_product):
    res = products_api.put("/api/productos/999", json={"nombre": "X", "precio": 1, "stock": 1})
    assert res.status_code == 404
    p = make_product()
    res = products_api.put(f"/api/productos/{p['id']}", json={"id": p["id"] + 1, "nombre": "X", "precio": 1, "stock": 1})
    assert res.status_code == 400
    assert res.text == "ID mismatch"


def test_delete_product(products_api, make_product):
    p = make_product()
    assert products_api.delete(f"/api/productos/{p['id']}").status_code == 204
    assert products_api.get(f"/api/productos/{p['id']}").status_code == 404
    assert products_api.delete(f"/api/productos/{p['id']}").status_code == 404


def test_patch_stock_is_absolute(products_api, make_product):
    p = make_product(stock=5)
    res = products_api.patch(f"/api/productos/{p['id']}/stock", json=12)
    assert res.status_code == 204
    assert products_api.get(f"/api/productos/{p['id']}").json()["stock"] == 12
    products_api.patch(f"/api/productos/{p['id']}/stock", json=0)
    assert products_api.get(f"/api/productos/{p['id']}").json()["stock"] == 0


def test_patch_stock_rejects_negative(products_api, make_product):
    p = make_product(stock=5)
    res = products_api.patch(f"/api/productos/{p['id']}/stock", json=-1)
    assert res.status_code == 400
    assert products_api.get(f"/api/productos/{p['id']}").json()["stock"] == 5
    # negative check comes before the existence check
    assert products_api.patch("/api/productos/999/stock", json=-1).status_code == 400
    assert products_api.patch("/api/productos/999/stock", json=1).status_code == 404


def test_list_filters_and_order(products_api, make_product):
    make_product(nombre="Zapato", categoria="Ropa", precio=30, stock=50)
    make_product(nombre="Abrigo", categoria="Ropa", precio=80, stock=2)
    make_product(nombre="Taladro", categoria="Herramientas", precio=120, stock=10)

    body = products_api.get("/api/productos").json()
    assert [p["nombre"] for p in body["data"]] == ["Abrigo", "Taladro", "Zapato"]
    assert body["total"] == 3

    body = products_api.get("/api/productos", params={"categoria": "ropa"}).json()
    assert {p["nombre"] for p in body["data"]} == {"Abrigo", "Zapato"}

    body = products_api.get("/api/productos", params={"nombre": "ALA"}).json()
    assert [p["nombre"] for p in body["data"]] == ["Taladro"]

    body = products_api.get("/api/productos", params={"precioMin": 50, "precioMax": 100}).json()
    assert [p["nombre"] for p in body["data"]] == ["Abrigo"]

    body = products_api.get("/api/productos", params={"stockBajo": "true"}).json()
    assert [p["nombre"] for p in body["data"]] == ["Abrigo", "Taladro"]


def test_pagination_envelope(products_api, make_product):
    for i in range(7):
        make_product(nombre=f"Item {i}")
    for page in (1, 2, 3):
        body = products_api.get("/api/productos", params={"page": page, "pageSize": 3}).json()
        assert body["page"] == page
        assert body["pageSize"] == 3
        assert body["total"] == 7
        assert body["totalPages"] == math.ceil(7 / 3)
        assert len(body["data"]) <= 3
    assert len(products_api.get("/api/productos", params={"page": 3, "pageSize": 3}).json()["data"]) == 1
    assert products_api.get("/api/productos", params={"pageSize": 0}).status_code == 400


def test_categories_are_distinct_and_sorted(products_api, make_product):
    make_product(nombre="A", categoria="Ropa")
    make_product(nombre="B", categoria="Herramientas")
    make_product(nombre="C", categoria="Ropa")
    make_product(nombre="D", categoria="")
    res = products_api.get("/api/productos/categorias")
    assert res.status_code == 200
    assert res.json() == ["Herramientas", "Ropa"]


def test_stats(products_api, make_product):
    make_product(nombre="A", precio=10, stock=5)
    make_product(nombre="B", precio=2.5, stock=20)
    body = products_api.get("/api/productos/estadisticas").json()
    assert body == {
        "totalProductos": 2,
        "stockTotal": 25,
        "valorInventario": 100.0,
        "productosStockBajo": 1,
    }


def test_unfiltered_list_counts_every_row(products_api, make_product):
    for name in ("Uno", "Dos", "Tres", "Cuatro"):
        make_product(nombre=name)
    body = products_api.get("/api/productos", params={"pageSize": 2}).json()
    assert body["total"] == 4
    assert body["totalPages"] == 2
    assert len(body["data"]) == 2


def test_name_uniqueness_folds_accented_letters(products_api, make_product):
    make_product(nombre="Ñandú")
    res = products_api.post("/api/productos", json={"nombre": "ñandú", "precio": 5, "stock": 1})
    assert res.status_code == 400
    assert "already exists" in res.text

    other = make_product(nombre="Árbol")
    res = products_api.put(
        f"/api/productos/{other['id']}", json={"nombre": "ÑANDÚ", "precio": 5, "stock": 1}
    )
    assert res.status_code == 400
    assert "Another product" in res.text


def test_name_filter_folds_accented_letters(products_api, make_product):
    make_product(nombre="Café Molido")
    make_product(nombre="Té Verde")
    body = products_api.get("/api/productos", params={"nombre": "CAFÉ"}).json()
    assert [p["nombre"] for p in body["data"]] == ["Café Molido"]


def test_price_is_rounded_to_cents(products_api, make_product):
    res = products_api.post("/api/productos", json={"nombre": "Chicle", "precio": "0.001", "stock": 1})
    assert res.status_code == 400
    assert "Price" in res.text

    p = make_product(nombre="Clavo", precio="2.345")
    assert p["precio"] == 2.35
    assert products_api.get(f"/api/productos/{p['id']}").json()["precio"] == 2.35
