from strapigen.generators.generator import generate_project
from strapigen.generators.types import GeneratedFile, GenerationOptions

__all__ = ["generate_project", "GeneratedFile", "GenerationOptions"]
