from word_cursor import WordCursor
from vocab_builder import VocabBuilder
from cursor_errors import ConfigurationError, WordCursorError

import click
import yaml
import os
import logging
from dataclasses import dataclass, fields
from typing import Optional

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'config.yaml')

logger = logging.getLogger(__name__)


@dataclass
class Config:
    encoding: str = 'utf-8'
    min_word_freq: int = 1
    max_vocab_size: Optional[int] = None
    top_n: int = 10
    log_level: str = 'WARNING'


def load_config(config_path):
    """Load configuration from a YAML file."""
    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Can't read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {config_path} must be a mapping")
    unknown = set(data) - {f.name for f in fields(Config)}
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    for key, value in data.items():
        check_config_value(key, value)
    return Config(**data)


CONFIG_TYPES = {
    'encoding': (str,),
    'min_word_freq': (int,),
    'max_vocab_size': (int, type(None)),
    'top_n': (int,),
    'log_level': (str,),
}


def check_config_value(key, value):
    """Raise ConfigurationError unless value fits the Config field `key`."""
    expected = CONFIG_TYPES[key]
    # bool is an int subclass, `top_n: yes` is still a mistake
    if isinstance(value, bool) or not isinstance(value, expected):
        names = ' or '.join('null' if t is type(None) else t.__name__ for t in expected)
        raise ConfigurationError(f"Config key {key} must be {names}, got {value!r}")
    if isinstance(value, int) and value < 0:
        raise ConfigurationError(f"Config key {key} must not be negative, got {value}")
    if key == 'log_level' and not isinstance(logging.getLevelName(value.upper()), int):
        raise ConfigurationError(f"Unknown log level {value!r}")


def resolve_config(config_path, encoding=None):
    # the bundled config is optional, an explicitly passed one is not
    if config_path == DEFAULT_CONFIG_PATH and not os.path.exists(config_path):
        cfg = Config()
    else:
        cfg = load_config(config_path)
    if encoding:
        cfg.encoding = encoding
    return cfg


def open_cursor(path, encoding):
    if path == '-':
        # the cursor owns stdin from here on and closes it when done, fine for a one-shot command
        return WordCursor(click.get_text_stream('stdin', encoding=encoding), encoding=encoding)
    return WordCursor(path, encoding=encoding)


@click.group()
@click.option('--config', default=DEFAULT_CONFIG_PATH, help='Path to config file')
@click.option('--encoding', default=None, help='Text encoding of the input (overrides config)')
@click.pass_context
def cli(ctx, config, encoding):
    """Stream words out of text files."""
    try:
        cfg = resolve_config(config, encoding)
    except WordCursorError as e:
        raise click.ClickException(str(e))

    logging.basicConfig(format="%(asctime)s-%(levelname)s:%(message)s", level=cfg.log_level.upper())
    logger.debug("Using config %s", cfg)
    ctx.obj = cfg


@cli.command()
@click.argument('path')
@click.pass_obj
def words(cfg, path):
    """Print every word of PATH on its own line ('-' reads stdin)."""
    try:
        with open_cursor(path, cfg.encoding) as cursor:
            while cursor.has_next():
                click.echo(cursor.next())
    except WordCursorError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument('path')
@click.option('--top-n', default=None, type=int, help='Number of most frequent words to show')
@click.pass_obj
def count(cfg, path, top_n):
    """Count the words of PATH and show the most frequent ones."""
    top_n = cfg.top_n if top_n is None else top_n
    try:
        vocab_builder = VocabBuilder(open_cursor(path, cfg.encoding), min_freq=cfg.min_word_freq, max_vocab_size=cfg.max_vocab_size)
        vocab, idx_to_word, word_counts = vocab_builder.build_vocab()
    except WordCursorError as e:
        raise click.ClickException(str(e))

    click.echo(f"Total words: {sum(word_counts.values())}")
    click.echo(f"Distinct words: {len(word_counts)}")
    click.echo(f"Vocabulary size: {len(vocab)}")
    shown = min(top_n, len(vocab))
    if shown:
        click.echo(f"\nTop {shown} words:")
        for i in range(shown):
            word = idx_to_word[i]
            click.echo(f"  {i+1:2}. {word:<20} {word_counts[word]}")


if __name__ == "__main__":
    cli()
