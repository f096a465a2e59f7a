import argparse
import concurrent.futures
import os

import requests

PRODUCTS = os.environ.get("INV_PRODUCTS_BASE", "http://127.0.0.1:5054")
TRANSACTIONS = os.environ.get("INV_TRANSACTIONS_BASE", "http://127.0.0.1:5055")


def sale_task(i, product_id, qty):
    payload = {
        "tipo": "Venta",
        "productoId": product_id,
        "cantidad": qty,
        "precioUnitario": 1,
        "detalle": f"concurrency #{i}",
    }
    try:
        r = requests.post(f"{TRANSACTIONS}/api/transacciones", json=payload, timeout=20)
        return (i, r.status_code, r.text)
    except Exception as e:
        return (i, "ERR", str(e))


def run(workers, product_id, qty):
    before = requests.get(f"{PRODUCTS}/api/productos/{product_id}", timeout=10).json()["stock"]
    print(f"Running sales: workers={workers}, product_id={product_id}, qty={qty}, stock_before={before}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(sale_task, i, product_id, qty) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    created = sum(1 for r in results if r[1] == 201)
    after = requests.get(f"{PRODUCTS}/api/productos/{product_id}", timeout=10).json()["stock"]
    # stock writes are absolute sets, so concurrent sales overwrite each other
    print(f"created={created} expected_stock={before - created * qty} actual_stock={after}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent sales at one product.")
    parser.add_argument("--product-id", type=int, required=True)
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--workers", type=int, default=8)
    args = parser.parse_args()
    run(args.workers, args.product_id, args.qty)
