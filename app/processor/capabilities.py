import importlib.util

from app.processor.exceptions import MissingDependency

# import name -> distribution name
REQUIRED_MODULES: dict[str, str] = {
    "pymupdf": "pymupdf",
    "pdfplumber": "pdfplumber",
    "openai": "openai",
    "httpx": "httpx",
    "cv2": "opencv-python-headless",
    "numpy": "numpy",
    "qrcode": "qrcode",
    "PIL": "pillow",
    "docx": "python-docx",
    "mammoth": "mammoth",
    "playwright": "playwright",
    "reportlab": "reportlab",
}


def check_dependencies(modules: dict[str, str] | None = None) -> None:
    """Fail fast if any third-party module the workflow needs is missing.

    Raises:
        MissingDependency: naming every missing distribution.
    """
    required = REQUIRED_MODULES if modules is None else modules
    missing = [
        distribution
        for module, distribution in required.items()
        if importlib.util.find_spec(module) is None
    ]
    if missing:
        raise MissingDependency(
            f"Missing required packages: {', '.join(sorted(missing))}"
        )
