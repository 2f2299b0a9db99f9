import sys
import threading
import time

from snowgen.config import load_settings
from snowgen.utils import build_generator

THREADS = 64
IDS_PER_THREAD = 1000


def run_stress(threads: int, per_thread: int):
    settings = load_settings()
    generator = build_generator(settings.node)
    results: list[list[int]] = [[] for _ in range(threads)]

    def worker(slot: list[int]) -> None:
        for _ in range(per_thread):
            slot.append(generator.next_id())

    workers = [threading.Thread(target=worker, args=(slot,)) for slot in results]
    started = time.perf_counter()
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    elapsed = time.perf_counter() - started

    all_ids = [i for slot in results for i in slot]
    distinct = len(set(all_ids))
    ordered = all(slot == sorted(slot) for slot in results)
    return len(all_ids), distinct, ordered, elapsed


if __name__ == "__main__":
    threads = int(sys.argv[1]) if len(sys.argv) > 1 else THREADS
    per_thread = int(sys.argv[2]) if len(sys.argv) > 2 else IDS_PER_THREAD

    total, distinct, ordered, elapsed = run_stress(threads, per_thread)
    print(f"Generated {total} IDs with {threads} threads in {elapsed:.3f}s ({total / elapsed:,.0f} IDs/s)")
    if distinct == total and ordered:
        print(f"✅ All {total} IDs distinct, per-thread order increasing")
    else:
        print(f"❌ {total - distinct} duplicates, per-thread order ok: {ordered}")
        sys.exit(1)
