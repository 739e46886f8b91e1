# sdk/catalog_client.py
import requests
import httpx
from typing import Any, Dict, Optional


class CatalogAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None,
                 timeout: int = 10, session=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.transport = transport
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    @staticmethod
    def _check(r) -> Any:
        # works for both requests and httpx responses
        if r.status_code >= 400:
            try:
                message = r.json().get("message", r.text)
            except ValueError:
                message = r.text
            raise CatalogAPIError(r.status_code, message)
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    @staticmethod
    def _list_params(q=None, category=None, min_price=None, max_price=None, page=None, limit=None) -> Dict[str, Any]:
        params = {}
        if q:
            params["q"] = q
        if category:
            params["category"] = category
        if min_price is not None:
            params["minPrice"] = min_price
        if max_price is not None:
            params["maxPrice"] = max_price
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return params

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        return self._check(r)

    # Products
    def list_products(self, q: Optional[str] = None, category: Optional[str] = None,
                      min_price: Optional[float] = None, max_price: Optional[float] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = self._list_params(q, category, min_price, max_price, page, limit)
        r = self.session.get(self._url("/products"), params=params, timeout=self.timeout)
        return self._check(r)

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/products/{product_id}"), timeout=self.timeout)
        return self._check(r)

    def create_product(self, name: str, description: str, price: float, category: str, stock: int):
        r = self.session.post(self._url("/products"), json={
            "name": name, "description": description, "price": price,
            "category": category, "stock": stock
        }, timeout=self.timeout)
        return self._check(r)

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, stock: int):
        r = self.session.put(self._url(f"/products/{product_id}"), json={
            "name": name, "description": description, "price": price,
            "category": category, "stock": stock
        }, timeout=self.timeout)
        return self._check(r)

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/products/{product_id}"), timeout=self.timeout)
        self._check(r)

    # Async list (example)
    async def list_products_async(self, **filters):
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport, headers=headers) as client:
            r = await client.get(self._url("/products"), params=self._list_params(**filters))
            return self._check(r)


if __name__ == "__main__":
    import argparse
    import json
    import os

    parser = argparse.ArgumentParser(description="Product catalog CLI")
    parser.add_argument("--base-url", default=os.getenv("CATALOG_API_URL", "http://127.0.0.1:8085"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--q", help="Search name and description")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--min-price", type=float)
    lp.add_argument("--max-price", type=float)
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    for cmd in ("create-product", "update-product"):
        sp = subparsers.add_parser(cmd, help=cmd.replace("-", " ").capitalize())
        if cmd == "update-product":
            sp.add_argument("--product-id", required=True)
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", required=True)
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--stock", type=int, required=True)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            out = c.list_products(args.q, args.category, args.min_price, args.max_price, args.page, args.limit)
        elif args.command == "get-product":
            out = c.get_product(args.product_id)
        elif args.command == "create-product":
            out = c.create_product(args.name, args.description, args.price, args.category, args.stock)
        elif args.command == "update-product":
            out = c.update_product(args.product_id, args.name, args.description, args.price,
                                   args.category, args.stock)
        else:
            c.delete_product(args.product_id)
            out = {"deleted": args.product_id}
    except CatalogAPIError as e:
        parser.exit(1, f"{e}\n")
    print(json.dumps(out, indent=2))
