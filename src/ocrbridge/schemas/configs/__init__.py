from ocrbridge.schemas.configs.tesseract_config import SearchPaths, TesseractCLIConfig

__all__ = [
    "SearchPaths",
    "TesseractCLIConfig",
]
