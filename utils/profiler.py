import psutil
from time import perf_counter
from contextlib import contextmanager

"""
Measure the time and memory usage of a block of code.
"""

@contextmanager
def profiler(description: str, length: int = 80, pad_char: str = ':') -> None:
    def get_memory_usage():
        process = psutil.Process()
        return {
            'rss      ': process.memory_info().rss / 1e6,
            'ram avail': psutil.virtual_memory().available / 1e6,
        }

    print('\n' + description.center(length, pad_char))
    before = get_memory_usage()
    start = perf_counter()
    yield

    seconds = perf_counter() - start
    after = get_memory_usage()
    # print all the memory usage DIFFERENCES (MB) on the same line with a '+' or '-' sign
    print(' | '.join(f'{k}: {v - before[k]:+8.1f}' for k, v in after.items()))
    print(f'{seconds * 1e3:.1f} ms for {description}'.center(length, pad_char))

# Example usage:
if __name__ == '__main__':
    with profiler('executing some code block to test the profiler'):
        print('Calculating...')
