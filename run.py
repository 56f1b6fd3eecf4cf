import sys

from src.chatllm.config import load_config
from src.chatllm.errors import ConfigError
from src.chatllm.logging_util import set_level
from src.chatllm.smoke import MODELS_TO_TEST, QUICK_MODELS, run_smoke, summarize

def main() -> int:
    args = sys.argv[1:]
    if "-h" in args or "--help" in args:
        print("Usage: python run.py [--quick] [--verbose] [provider:model ...]")
        return 0

    models = [a for a in args if not a.startswith("-")]
    if not models:
        models = QUICK_MODELS if "--quick" in args else MODELS_TO_TEST
    if "--verbose" in args or "-v" in args:
        set_level("INFO")

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    results = run_smoke(config, models)
    print(summarize(results))
    return 0 if all(r.passed for r in results) else 1

if __name__ == "__main__":
    raise SystemExit(main())
