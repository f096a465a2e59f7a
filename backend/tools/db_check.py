"""
Print products, recent transactions and the net transaction effect per product.

Stock pushes after a transaction write are best-effort, so stock can drift from
what the transactions imply. Comparing `stock` against `net_effect` (purchases
minus sales) is the starting point for fixing a product by hand with
PATCH /api/productos/{id}/stock.

Usage:
    python tools/db_check.py [productos.db] [transacciones.db]
"""
import sqlite3
import sys

PRODUCTS_DB = sys.argv[1] if len(sys.argv) > 1 else "productos.db"
TRANSACTIONS_DB = sys.argv[2] if len(sys.argv) > 2 else "transacciones.db"

pconn = sqlite3.connect(PRODUCTS_DB)
tconn = sqlite3.connect(TRANSACTIONS_DB)

print("=== Recent Transactions ===")
for r in tconn.execute(
    "SELECT id, fecha, tipo, producto_id, cantidad, precio_unitario, precio_total, detalle "
    "FROM transacciones ORDER BY fecha DESC LIMIT 20"
):
    print(r)

net = {
    pid: effect
    for pid, effect in tconn.execute(
        "SELECT producto_id, SUM(CASE WHEN tipo = 'Compra' THEN cantidad ELSE -cantidad END) "
        "FROM transacciones GROUP BY producto_id"
    )
}

print("\n=== Products ===")
known = set()
for pid, nombre, stock in pconn.execute("SELECT id, nombre, stock FROM productos ORDER BY nombre"):
    known.add(pid)
    print({"id": pid, "nombre": nombre, "stock": stock, "net_effect": net.get(pid, 0)})

orphans = sorted(set(net) - known)
if orphans:
    print("\n=== Transactions referencing missing products ===")
    print(orphans)

pconn.close()
tconn.close()
