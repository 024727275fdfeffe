import threading


def run_concurrent(target_fn, n_threads: int, timeout: float = 5.0):
    results = [None] * n_threads
    errors = [None] * n_threads
    threads = []
    start_barrier = threading.Barrier(n_threads)

    def worker(i):
        try:
            start_barrier.wait(timeout=timeout)
            results[i] = target_fn(i)
        except Exception as e:
            errors[i] = e

    for i in range(n_threads):
        t = threading.Thread(target=worker, args=(i,), daemon=True)
        threads.append(t)
        t.start()
    for t in threads:
        t.join(timeout=timeout + 1.0)
    return results, errors
