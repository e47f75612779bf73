"""Writer configuration: frozen dataclass loaded from env vars and CLI args."""

import argparse
import os
from dataclasses import dataclass

from gelf_udp.chunker import CHUNK_SIZE


@dataclass(frozen=True)
class WriterConfig:
    host: str = "localhost"
    port: int = 12201
    compression: str = "gzip"
    compression_level: int = 1
    chunk_size: int = CHUNK_SIZE
    facility: str = ""

    @property
    def address(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def add_config_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register the writer flags on ``parser``. Defaults are None so env vars show through."""
    parser.add_argument("--host", type=str, default=None, help="GELF server host")
    parser.add_argument("--port", type=int, default=None, help="GELF server UDP port")
    parser.add_argument("--compression", type=str, default=None,
                        choices=["gzip", "zlib", "none"], help="Payload compression")
    parser.add_argument("--compression-level", type=int, default=None,
                        help="Codec level, -1 (default) or 0 (store) to 9 (smallest)")
    parser.add_argument("--chunk-size", type=int, default=None,
                        help="Largest datagram before chunking, in bytes")
    parser.add_argument("--facility", type=str, default=None, help="GELF facility field")
    return parser


def config_from_args(args: argparse.Namespace) -> WriterConfig:
    """Build WriterConfig from env vars, overridden by any parsed CLI flags."""
    env = {
        "host": os.environ.get("GELF_HOST", WriterConfig.host),
        "port": int(os.environ.get("GELF_PORT", str(WriterConfig.port))),
        "compression": os.environ.get("GELF_COMPRESSION", WriterConfig.compression).lower(),
        "compression_level": int(
            os.environ.get("GELF_COMPRESSION_LEVEL", str(WriterConfig.compression_level))
        ),
        "chunk_size": int(os.environ.get("GELF_CHUNK_SIZE", str(WriterConfig.chunk_size))),
        "facility": os.environ.get("GELF_FACILITY", WriterConfig.facility),
    }

    overrides = {
        "host": args.host,
        "port": args.port,
        "compression": args.compression,
        "compression_level": args.compression_level,
        "chunk_size": args.chunk_size,
        "facility": args.facility,
    }
    for key, value in overrides.items():
        if value is not None:
            env[key] = value

    return WriterConfig(**env)


def load_config(argv: list[str] | None = None) -> WriterConfig:
    """Build WriterConfig from defaults <- env vars <- CLI args (highest priority).

    Pass argv for testability; when None, argparse reads sys.argv.
    """
    parser = add_config_arguments(argparse.ArgumentParser(description="GELF UDP writer"))
    return config_from_args(parser.parse_args(argv))
