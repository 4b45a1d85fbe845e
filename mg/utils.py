## Utils
## Profiling, prime generation and configuration helpers

import time
import sympy
import random
import json
import os

import numpy as np
from loguru import logger

# lambdas
random_list = lambda low, high, count: [random.randint(low, high) for _ in range(count)]

DEFAULT_CONFIG = {
    "ENFORCE_PRIMALITY": True,
    "INVERSE_STRATEGY": "hensel",
    "PRIME_BITS": 256
}


def profiler(num_runs=100, enabled=True):
    '''
        Run the decorated function num_runs times and log the timing statistics, then return the result of one
        more (untimed) call. The collected samples (in seconds) are kept on the wrapper as `last_samples`.
    '''
    def decorator(func):
        if not enabled:
            # If profiling is disabled, return the original function unmodified
            return func

        def wrapper(*args, **kwargs):
            samples = np.empty(num_runs)
            for i in range(num_runs):
                start_time = time.perf_counter()
                func(*args, **kwargs)
                samples[i] = time.perf_counter() - start_time

            wrapper.last_samples = samples
            logger.info(f"Execution time for {func.__name__} over {num_runs} runs: "
                        f"mean={samples.mean():.3e}s, std={samples.std():.3e}s")
            return func(*args, **kwargs)

        wrapper.last_samples = None
        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper

    return decorator


def generate_large_primes(count, num_bits=256):
    """Generate a list of large prime numbers of specified bit length."""
    primes = []
    while len(primes) < count:
        prime = int(sympy.randprime(2 ** (num_bits - 1), 2 ** num_bits))
        primes.append(prime)
    return primes


def next_prime_from_random(num_bits, rng=None):
    """ First prime after a random number of num_bits bits (may exceed num_bits by one bit); always odd"""
    rng = rng or random
    draw = rng.getrandbits(num_bits) | (1 << num_bits - 1)  # top bit set
    return int(sympy.nextprime(max(draw, 2)))


def load_config():
    config_filename = 'config.json'

    # Determine the script directory (assumed to be the project root)
    script_directory = os.path.dirname(os.path.abspath(__file__))
    project_root_path = os.path.join(script_directory, '..', )
    project_root_config_path = os.path.join(project_root_path, config_filename)

    # Paths to check for the config file
    paths_to_check = [
        os.path.join(os.getcwd(), config_filename),  # Current Working Directory
        os.path.normpath(project_root_config_path)  # Project Root Directory
    ]

    # Check if the environment variable MG_CONFIG_PATH is set
    env_config_path = os.getenv('MG_CONFIG_PATH')
    if env_config_path:
        paths_to_check.append(env_config_path)

    for path in paths_to_check:
        if os.path.exists(path):
            with open(path, 'r') as file:
                loaded = json.load(file)
            logger.debug(f'Loaded configuration from {path}')
            return {**DEFAULT_CONFIG, **loaded}

    # No configuration found, fall back to defaults
    return dict(DEFAULT_CONFIG)
