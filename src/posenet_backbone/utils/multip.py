'''Simple thread-pool framework wrapped in a class.'''

# standard imports
import concurrent.futures
import os
import typing
# third-party imports
import tqdm

# global
CORE_N = max((os.cpu_count() or 1) - 1, 1)

Job: typing.TypeAlias = tuple[
    typing.Callable[..., typing.Any],
    tuple[typing.Any, ...],
    dict[str, typing.Any]
]

class ParallelExecutor:
    '''Run independent jobs on a thread pool, results in job order.'''

    def __init__(
            self,
            max_workers: int=CORE_N,
            show_progress: bool=False
        ):
        '''
        Initialize the executor.

        Args:
            max_workers (int): Number of worker threads. Default cores - 1.
            show_progress (bool): Show tqdm progress bar.
        '''
        self.max_workers = max_workers
        self.show_progress = show_progress

    def run(self, jobs: list[Job]) -> list[typing.Any]:
        '''
        Execute jobs in parallel.

        The first job to fail re-raises its exception in the caller once
        all jobs have settled.

        Args:
            jobs (list): List of tuples (func, args, kwargs).

        Returns:
            list: Results from executing all jobs, in submission order.
        '''

        with concurrent.futures.ThreadPoolExecutor(self.max_workers) as exe:
            futures = [
                exe.submit(func, *args, **kwargs)
                for func, args, kwargs in jobs
            ]
            iterator = (f.result() for f in futures)
            if self.show_progress:
                return list(tqdm.tqdm(iterator, total=len(jobs)))
            return list(iterator)
