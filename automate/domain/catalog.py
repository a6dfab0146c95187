"""Endpoint catalog of the store REST backend.

Pure data: every operation the action generator is allowed to reference.
Paths keep their ``{id}`` placeholders; nothing here substitutes them.
"""

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from automate.domain.models import normalize_method


@dataclass(frozen=True)
class EndpointDescriptor:
    path: str
    method: str  # "GET" | "POST" | "PUT" | "DELETE"
    description: str

    def __post_init__(self):
        object.__setattr__(self, "method", normalize_method(self.method))

    def to_dict(self) -> Dict[str, str]:
        return {"endpoint": self.path, "method": self.method, "description": self.description}


EndpointCatalog = Mapping[str, Mapping[str, EndpointDescriptor]]

# area -> operation -> (relative path, method, description)
_ROUTES: Dict[str, Dict[str, Tuple[str, str, str]]] = {
    "products": {
        "list": ("/products", "GET", "Get all products"),
        "create": ("/products", "POST", "Create new product"),
        "update": ("/products/{id}", "PUT", "Update product"),
        "delete": ("/products/{id}", "DELETE", "Delete product"),
        "search": ("/products/search", "GET", "Search products"),
        "updateStock": ("/products/{id}/stock", "PUT", "Update product stock"),
        "bulkImport": ("/products/bulk-import", "POST", "Bulk import products"),
    },
    "customers": {
        "list": ("/customers", "GET", "Get all customers"),
        "create": ("/customers", "POST", "Create new customer"),
        "update": ("/customers/{id}", "PUT", "Update customer"),
        "delete": ("/customers/{id}", "DELETE", "Delete customer"),
        "orders": ("/customers/{id}/orders", "GET", "Get customer orders"),
        "balance": ("/customers/{id}/balance", "GET", "Get customer balance"),
        "updateBalance": ("/customers/{id}/balance", "PUT", "Update customer balance"),
    },
    "orders": {
        "list": ("/orders", "GET", "Get all orders"),
        "create": ("/orders", "POST", "Create new order"),
        "update": ("/orders/{id}", "PUT", "Update order"),
        "delete": ("/orders/{id}", "DELETE", "Delete order"),
        "updateStatus": ("/orders/{id}/status", "PUT", "Update order status"),
        "addPayment": ("/orders/{id}/payments", "POST", "Add payment to order"),
        "items": ("/orders/{id}/items", "GET", "Get order items"),
        "addItem": ("/orders/{id}/items", "POST", "Add item to order"),
        "removeItem": ("/orders/{id}/items/{itemId}", "DELETE", "Remove item from order"),
    },
    "suppliers": {
        "list": ("/suppliers", "GET", "Get all suppliers"),
        "create": ("/suppliers", "POST", "Create new supplier"),
        "update": ("/suppliers/{id}", "PUT", "Update supplier"),
        "delete": ("/suppliers/{id}", "DELETE", "Delete supplier"),
        "products": ("/suppliers/{id}/products", "GET", "Get supplier products"),
    },
    "purchase-orders": {
        "list": ("/purchase-orders", "GET", "Get all purchase orders"),
        "create": ("/purchase-orders", "POST", "Create new purchase order"),
        "update": ("/purchase-orders/{id}", "PUT", "Update purchase order"),
        "delete": ("/purchase-orders/{id}", "DELETE", "Delete purchase order"),
        "approve": ("/purchase-orders/{id}/approve", "PUT", "Approve purchase order"),
        "receive": ("/purchase-orders/{id}/receive", "PUT", "Mark purchase order as received"),
    },
    "finance": {
        "addExpense": ("/finance/expenses", "POST", "Add new expense"),
        "getExpenses": ("/finance/expenses", "GET", "Get all expenses"),
        "updateExpense": ("/finance/expenses/{id}", "PUT", "Update expense"),
        "deleteExpense": ("/finance/expenses/{id}", "DELETE", "Delete expense"),
        "getRevenue": ("/finance/revenue", "GET", "Get revenue data"),
        "getCashFlow": ("/finance/cash-flow", "GET", "Get cash flow data"),
    },
    "analytics": {
        "salesReport": ("/reports/sales", "GET", "Get sales analytics"),
        "inventoryReport": ("/reports/inventory", "GET", "Get inventory analytics"),
        "financialReport": ("/reports/financial", "GET", "Get financial analytics"),
        "customerReport": ("/reports/customers", "GET", "Get customer analytics"),
        "profitReport": ("/reports/profit", "GET", "Get profit analytics"),
    },
    "dashboard": {
        "stats": ("/dashboard/enhanced-stats", "GET", "Get dashboard statistics"),
        "dailySales": ("/dashboard/daily-sales", "GET", "Get daily sales data"),
        "categoryPerformance": ("/dashboard/category-performance", "GET", "Get category performance"),
        "inventoryStatus": ("/dashboard/inventory-status", "GET", "Get inventory status"),
    },
    "notifications": {
        "list": ("/notifications", "GET", "Get notifications"),
        "markAsRead": ("/notifications/{id}/read", "PUT", "Mark notification as read"),
        "markAllAsRead": ("/notifications/mark-all-read", "PUT", "Mark all notifications as read"),
    },
    "calendar": {
        "events": ("/calendar/events", "GET", "Get calendar events"),
        "createEvent": ("/calendar/events", "POST", "Create calendar event"),
        "updateEvent": ("/calendar/events/{id}", "PUT", "Update calendar event"),
        "deleteEvent": ("/calendar/events/{id}", "DELETE", "Delete calendar event"),
    },
    "settings": {
        "get": ("/settings", "GET", "Get system settings"),
        "update": ("/settings", "PUT", "Update system settings"),
        "backup": ("/settings/backup", "POST", "Create system backup"),
        "restore": ("/settings/restore", "POST", "Restore from backup"),
    },
}

DOMAIN_AREAS = tuple(_ROUTES)

# Selected quick action -> catalog area. Anything else gets the whole catalog.
AREA_ALIASES = {
    "sales": "orders",
}


@dataclass(frozen=True)
class QuickAction:
    action: str
    title: str
    description: str


QUICK_ACTIONS: List[QuickAction] = [
    QuickAction("products", "Products", "Add, update, or manage inventory"),
    QuickAction("customers", "Customers", "Manage customer data and profiles"),
    QuickAction("sales", "Sales", "Process sales and transactions"),
    QuickAction("suppliers", "Suppliers", "Manage supplier relationships"),
    QuickAction("purchase-orders", "Purchase Orders", "Create and manage purchase orders"),
    QuickAction("orders", "Orders", "View and process customer orders"),
    QuickAction("analytics", "Analytics", "Generate reports and insights"),
    QuickAction("finance", "Finance", "Financial tracking and management"),
]

SELECTABLE_AREAS = frozenset(a.action for a in QUICK_ACTIONS)


def build_catalog(base_url: str) -> EndpointCatalog:
    """Build the immutable catalog with every path rooted at ``base_url``."""
    base = base_url.rstrip("/")
    return MappingProxyType({
        area: MappingProxyType({
            name: EndpointDescriptor(f"{base}{path}", method, description)
            for name, (path, method, description) in ops.items()
        })
        for area, ops in _ROUTES.items()
    })


def catalog_slice(catalog: EndpointCatalog, domain_area: str) -> EndpointCatalog:
    """Return the part of the catalog relevant to ``domain_area``."""
    area = AREA_ALIASES.get(domain_area, domain_area)
    if area in catalog:
        return MappingProxyType({area: catalog[area]})
    return catalog


def catalog_to_dict(catalog: EndpointCatalog) -> Dict[str, Dict[str, Dict[str, str]]]:
    return {
        area: {name: desc.to_dict() for name, desc in ops.items()}
        for area, ops in catalog.items()
    }


def catalog_to_prompt(catalog: EndpointCatalog) -> str:
    """Serialize a catalog slice for embedding in a model directive."""
    return json.dumps(catalog_to_dict(catalog), indent=2, ensure_ascii=False)


def display_name(domain_area: str) -> str:
    """'purchase-orders' -> 'purchase orders'"""
    return domain_area.replace("-", " ")
