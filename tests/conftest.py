from datetime import date
from itertools import count

import pytest

from src.extraction.parser import InvoiceParser
from src.extraction.segmenter import PAGE_BREAK
from src.postprocessor.assembler import RecordAssembler


PREMIER_TEXT = """PREMIER ENERGY SRL
Factura nr: PE2024000123
Data emiterii: 05.02.2024
CLIENT SC EXEMPLU INDUSTRIES SRL
Cod CUI RO12345678
Loc de consum (NLC): 5001122334
Perioada: 01.01.2024-31.01.2024
Consum: 12.450 kWh
Total de plata: 8.234,50 lei
"""

UNKNOWN_TEXT = """Document scanat fara antet
Acesta este un text oarecare, fara furnizor cunoscut.
Suma: 100,00
"""

ELECTRICA_PAGES = [
    """ELECTRICA FURNIZARE S.A.
Serie/Nr: EFSR2500123456
Data emiterii: 15.02.2025
CLIENT PRIMARIA COMUNEI TEST
Adresa de corespondenta: Str. Principala nr. 1, Comuna Test, judetul Cluj
Perioada de facturare: 01.01.2025 - 31.01.2025
Total de plata: 1.234,56 lei""",
    """DETALII LOC DE CONSUM – SCOALA GIMNAZIALA - energie activa
Adresa loc de consum: Str. Scolii nr. 2, Comuna Test, Cod postal 407001
COD Loc de consum (NLC): 7001234567
POD: 594033100000123456
Total loc de consum: 1.250 kWh""",
    """DETALII LOC DE CONSUM – CAMIN CULTURAL - energie activa
Adresa loc de consum: Str. Morii nr. 5, Comuna Test, Cod postal 407001
COD Loc de consum (NLC): 7001234568
POD: 594033100000123457
Total loc de consum: 830 kWh""",
]

PPC_PAGES = [
    """PPC ENERGIE S.A.
Factura seria 25EI nr 06295537 din data de 24.02.2025
CLIENT COMUNA BANIA
Adresa: Strada Principala nr. 1, comuna BANIA, judetul Caras-Severin
Perioadă facturare: 16.10.2024-31.01.2025
Total de plată (6=4+5) 30.075,79 lei""",
    """CAMIN
Adresă loc consum: Strada BANIA, nr. 129, localitate BANIA, cod poștal 327015
Cod ELECTEL: 541393231, POD: RO005E541393231
Energie activă 17.10.24-16.01.25 kWh 1 26222/cit 26222/estimat convenie 0 0 0
Energie activă 17.01.25-31.01.25 kWh 1 26222/estimat convenie 26270/cit 48 0 48
Detaliere consum cf. OUG 27/2022
1. Energie activă 01.11.24-30.11.24 kWh 1 0 0 0""",
    """BLOC SPECIALISTI
Adresă loc consum: Strada BANIA, nr. 131, localitate BANIA, cod poștal 327015
Cod ELECTEL: 541393232, POD: RO005E541393232
Energie activă 01.01.25-31.01.25 kWh 1 1200/cit 1428/cit 228 0 228""",
]


def join_pages(pages):
    return "".join(page + PAGE_BREAK for page in pages)


@pytest.fixture
def premier_text():
    return PREMIER_TEXT


@pytest.fixture
def unknown_text():
    return UNKNOWN_TEXT


@pytest.fixture
def electrica_text():
    return join_pages(ELECTRICA_PAGES)


@pytest.fixture
def ppc_text():
    return join_pages(PPC_PAGES)


@pytest.fixture
def ppc_site_page():
    return PPC_PAGES[1]


@pytest.fixture
def assembler():
    ids = count(1)
    return RecordAssembler(
        id_factory=lambda: f"rec-{next(ids)}",
        clock=lambda: date(2025, 3, 1)
    )


@pytest.fixture
def parser(assembler):
    return InvoiceParser(assembler=assembler)
