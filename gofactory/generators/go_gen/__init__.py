"""Go code generation: normalize specifications, render elements, verify builds."""
from gofactory.generators.go_gen.engine import generate
from gofactory.generators.go_gen.normalizer import create_complete_entity_set, normalize
from gofactory.generators.go_gen.verifier import BuildVerifier

__all__ = ["normalize", "generate", "create_complete_entity_set", "BuildVerifier"]
