import io

import pytest
from rich.console import Console

from shelfscan.core.pipeline import THEME
from shelfscan.models import FetchResult, SupplierConfig


@pytest.fixture
def console():
    return Console(theme=THEME, file=io.StringIO(), width=120)


@pytest.fixture
def catalog_html():
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Catalog</title>
    </head>
    <body>
        <ul class="products">
            <li class="product">
                <h2 class="name">  Espresso Beans 1kg </h2>
                <span class="price">€ 19,99</span>
                <span class="badge">-10%</span>
                <span class="stock">In stock</span>
            </li>
            <li class="product">
                <h2 class="name">Filter Papers</h2>
                <span class="stock">Out of stock</span>
            </li>
            <li class="product">
                <h2 class="name">Grinder Pro</h2>
                <span class="price">1.299,50 €</span>
                <span class="stock">In stock</span>
            </li>
        </ul>
        <aside><span class="price">999</span></aside>
    </body>
    </html>
    """


@pytest.fixture
def supplier_config():
    return SupplierConfig.create(
        name='Coffee Co',
        url='https://shop.example.com/catalog',
        product_selector='li.product',
        name_selector='.name',
        price_selector='.price',
        promotion_selector='.badge',
        availability_selector='.stock',
    )


@pytest.fixture
def fetch_result(catalog_html):
    return FetchResult(
        url='https://shop.example.com/catalog',
        content=catalog_html.encode('utf-8'),
        status_code=200,
        content_type='text/html; charset=utf-8',
        encoding='utf-8',
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line('markers', 'integration: marks tests as integration tests')
    config.addinivalue_line('markers', 'unit: marks tests as unit tests')


def pytest_collection_modifyitems(config, items):
    """Apply directory-based marks to collected test items."""
    for item in items:
        file_path = str(item.path)
        if '/tests/integration/' in file_path:
            item.add_marker(pytest.mark.integration)
        elif '/tests/unit/' in file_path:
            item.add_marker(pytest.mark.unit)
