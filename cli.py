"""Command-line entry point for chatllm.

Usage examples:
- Default model from config:
  python cli.py "Explain quantum computing"

- Explicit model, saved as HTML:
  python cli.py -m anthropic:claude-3-opus-20240229 -F html --save "Write a poem"

- Attach files:
  python cli.py -f document.txt,diagram.png "Analyze these files"

- Pipe input:
  echo "Translate to French: Hello world" | python cli.py -m google:gemini-pro

Notes:
- One prompt, one request, one answer. No multi-turn, no retries.
- The answer goes to stdout; everything else goes to stderr.
"""
import argparse
import sys
from typing import List, Optional

from src.chatllm.client import ChatClient
from src.chatllm.config import CONFIG_FILE, init_config, load_config
from src.chatllm.errors import ChatLLMError, ConfigError, ValidationError
from src.chatllm.formatting import FORMATS, format_output, save_output
from src.chatllm.input_spec import read_prompt
from src.chatllm.logging_util import set_level

EPILOG = f"""\
configuration:
  Run with --init to create a configuration file ({CONFIG_FILE}).
  Set DEFAULT_MODEL=provider:model in the config file and add your API keys.

supported providers:
  openai, anthropic, google, mistral, deepseek, meta
"""

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="chatllm",
        description="Universal LLM CLI interface",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("prompt", nargs="?", help="Prompt text")
    ap.add_argument("-m", "--model", help="Model in provider:model format, e.g. openai:gpt-4")
    ap.add_argument("-f", "--files", default="", help="Input files (comma-separated)")
    ap.add_argument("-o", "--output", help="Output file (auto-generated with --save)")
    ap.add_argument("-F", "--format", default="markdown", choices=FORMATS, help="Output format")
    ap.add_argument("-t", "--temperature", type=float, default=0.7, help="Temperature (0.0-2.0)")
    ap.add_argument("-T", "--max-tokens", type=int, default=4096, help="Maximum output tokens")
    ap.add_argument("--file", dest="prompt_file", help="Read prompt from file")
    ap.add_argument("--stdin", action="store_true", help="Read prompt from stdin")
    ap.add_argument("--save", action="store_true", help="Save output to file")
    ap.add_argument("--init", action="store_true", help="Initialize configuration file")
    ap.add_argument("--config", help=f"Configuration file (default: {CONFIG_FILE})")
    ap.add_argument("--strict", action="store_true", help="Only allow models listed in the allowlist")
    ap.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    ap.add_argument("--debug", action="store_true", help="Show raw API response")
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.debug:
        set_level("DEBUG")
    elif args.verbose:
        set_level("INFO")

    if args.init:
        path, created = init_config(args.config)
        if created:
            print(f"Configuration file created: {path}")
            print("Please edit the file and add your API keys and set your preferred DEFAULT_MODEL.")
        else:
            print(f"Configuration file already exists: {path}")
        return 0

    flags = {name for name in ("save", "verbose", "debug") if getattr(args, name)}

    try:
        config = load_config(args.config)
        prompt = read_prompt(args.prompt, args.prompt_file, args.stdin)

        client = ChatClient(config)
        result = client.run(
            prompt,
            model=args.model,
            files=args.files,
            max_tokens=args.max_tokens,
            temperature=args.temperature,
            strict=args.strict,
            flags=frozenset(flags),
        )
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ChatLLMError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    formatted = format_output(
        args.format,
        result.answer.content,
        prompt,
        result.provider.value,
        result.model,
        result.usage_summary,
    )
    print(formatted)

    if args.output or args.save:
        path = save_output(formatted, args.output, args.format)
        print(f"Output saved to: {path}", file=sys.stderr)

    if args.debug:
        print("", file=sys.stderr)
        print("=== DEBUG INFORMATION ===", file=sys.stderr)
        print(f"Provider: {result.provider.value}", file=sys.stderr)
        print(f"Model: {result.model}", file=sys.stderr)
        print(f"HTTP status: {result.meta.get('status')}", file=sys.stderr)
        for name, value in result.meta.get("steps", {}).items():
            print(f"{name}: {value}", file=sys.stderr)
        print("Raw API Response:", file=sys.stderr)
        print(result.raw, file=sys.stderr)
        print("=========================", file=sys.stderr)

    if args.verbose and result.usage_summary:
        print("", file=sys.stderr)
        print(result.usage_summary, file=sys.stderr)

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
