import pytest

from src.extraction.classifier import SupplierClassifier, identify_supplier
from src.extraction.invoice_record import Supplier


@pytest.mark.parametrize("text, expected", [
    ("PPC Energie S.A. - factura", Supplier.PPC),
    ("Cod ELECTEL: 541393231", Supplier.PPC),
    ("Electrica Furnizare SA", Supplier.ELECTRICA),
    ("Operator: E-Distributie Banat", Supplier.ELECTRICA),
    ("Premier Energy SRL", Supplier.PREMIER),
    ("CEZ Vanzare S.A.", Supplier.CEZ),
    ("Enel Energie Muntenia", Supplier.ENEL),
    ("E.ON Energie Romania", Supplier.EON),
    ("oarecare text fara furnizor", Supplier.UNKNOWN),
    ("", Supplier.UNKNOWN),
    (None, Supplier.UNKNOWN),
])
def test_identify_supplier(text, expected):
    assert identify_supplier(text) == expected


def test_priority_order_prefers_ppc_over_distributor_tokens():
    text = "PPC ENERGIE\nDistribuitor: E-Distributie Banat"
    assert identify_supplier(text) == Supplier.PPC


def test_tokens_require_word_boundaries():
    assert identify_supplier("PERCEZIUNE") == Supplier.UNKNOWN
    assert identify_supplier("GENELAB") == Supplier.UNKNOWN


def test_custom_tokens():
    classifier = SupplierClassifier(tokens=[(Supplier.CEZ, [r'CUSTOM'])])
    assert classifier.classify("custom supplier") == Supplier.CEZ
    assert classifier.classify("PPC ENERGIE") == Supplier.UNKNOWN
