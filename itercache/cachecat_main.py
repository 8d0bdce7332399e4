#!/usr/bin/env python3
import contextlib
import sys
import time
from typing import Iterable, Iterator, Optional

import click

from itercache.itertools import cache_all, cache_exactly, cache_up_to, PrefetchCache, SourceExhaustedDuringFill


def prefetch_lines(
    lines: Iterable[bytes], exactly: Optional[int], up_to: Optional[int], everything: bool
) -> PrefetchCache[bytes]:
    if exactly is not None:
        return cache_exactly(lines, exactly)
    elif up_to is not None:
        return cache_up_to(lines, up_to)
    elif everything:
        return cache_all(lines)
    return PrefetchCache(lines)


@click.command()
@click.argument('source', nargs=1, type=click.Path(exists=True, allow_dash=True))
@click.option('-n', '--exactly', type=click.IntRange(min=0))
@click.option('-u', '--up-to', type=click.IntRange(min=0))
@click.option('-a', '--all', 'everything', is_flag=True)
@click.option('-o', '--output', default='-')
@click.option('-v', '--verbose', count=True)
def main(
    source: str, exactly: Optional[int], up_to: Optional[int], everything: bool, output: str, verbose: int
) -> None:
    modes = [m for m in (exactly is not None, up_to is not None, everything) if m]
    if len(modes) > 1:
        raise click.UsageError('Only one of --exactly, --up-to and --all can be used')
    timer = timing if verbose >= 2 else dummy_timing

    with click.open_file(source, 'rb') as f:
        with timer('Prefetching'):
            try:
                lines = prefetch_lines(f, exactly, up_to, everything)
            except SourceExhaustedDuringFill as e:
                print(f'Cannot cache {exactly} lines from {source}: {e}', file=sys.stderr)
                sys.exit(1)

        if verbose >= 1:
            print(f'[cache] {lines.buffered} lines buffered', file=sys.stderr)

        with timer('Writing output'):
            with click.open_file(output, 'wb') as f2:
                for line in lines:
                    f2.write(line)


@contextlib.contextmanager
def timing(description: str) -> Iterator[None]:
    t0 = time.time()
    yield
    t1 = time.time()
    dt = (t1 - t0) * 1000
    print(f'[timer] {description} took {dt:4f} ms', file=sys.stderr)


@contextlib.contextmanager
def dummy_timing(description: str) -> Iterator[None]:
    yield


if __name__ == '__main__':
    main()
