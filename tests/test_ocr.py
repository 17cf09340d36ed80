from PIL import Image

from src.input_handler import ImageProcessor
from src.ocr_engine import OCREngine, TesseractBackend


class FakeBackend:
    def __init__(self):
        self.sources = []

    def extract_text(self, image, source="image"):
        self.sources.append(source)
        return f"text of {image.size[0]}px"


def test_prepare_flattens_alpha_and_converts_to_grayscale():
    image = Image.new("RGBA", (20, 10), (255, 0, 0, 0))
    prepared = ImageProcessor().prepare(image)

    assert prepared.mode == "L"
    assert prepared.size == (20, 10)
    assert prepared.getpixel((0, 0)) == 255


def test_process_reads_every_frame(tmp_path):
    path = tmp_path / "scan.tiff"
    frames = [Image.new("RGB", (30, 20), "white"), Image.new("RGB", (30, 20), "black")]
    frames[0].save(path, save_all=True, append_images=frames[1:])

    pages, metadata = ImageProcessor().process(path)

    assert len(pages) == 2
    assert metadata["page_count"] == 2
    assert metadata["format"] == "TIFF"


def test_engine_extracts_pages_in_order():
    backend = FakeBackend()
    engine = OCREngine(backend=backend)

    pages = engine.extract_pages([Image.new("L", (5, 5)), Image.new("L", (7, 7))], source="scan.pdf")

    assert pages == ["text of 5px", "text of 7px"]
    assert backend.sources == ["scan.pdf page 1", "scan.pdf page 2"]


def test_engine_opens_image_paths(tmp_path):
    path = tmp_path / "factura.png"
    Image.new("RGB", (12, 4), "white").save(path)
    backend = FakeBackend()

    assert OCREngine(backend=backend).extract_text(str(path)) == "text of 12px"
    assert backend.sources == ["factura.png"]


def test_engine_defaults_to_tesseract():
    assert isinstance(OCREngine().backend, TesseractBackend)


def test_tesseract_config_string():
    backend = TesseractBackend(language="ron")
    backend.psm, backend.oem, backend.extra_config = 6, 1, "-c preserve_interword_spaces=1"

    assert backend._build_config() == "--psm 6 --oem 1 -c preserve_interword_spaces=1"
    assert backend.language == "ron"
