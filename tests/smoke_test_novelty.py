"""
Quick Smoke Tests for the Novelty Archive
=========================================

Fast validation that core components work.
Run with: python tests/smoke_test_novelty.py

Exit codes:
  0 = All tests passed
  1 = Some tests failed
"""

import sys
import numpy as np
import traceback

# Add project root
sys.path.insert(0, '.')

def test_result(name, passed, error=None):
    """Print test result."""
    status = "✓ PASS" if passed else "✗ FAIL"
    print(f"  {status}: {name}")
    if error and not passed:
        print(f"       Error: {error}")
    return passed


def run_smoke_tests():
    """Run quick smoke tests on all novelty archive components."""
    print("\n" + "="*60)
    print("NOVELTY ARCHIVE SMOKE TESTS")
    print("="*60 + "\n")

    all_passed = True

    # -------------------------------------------------------------------------
    # Test 1: Distance
    # -------------------------------------------------------------------------
    print("[1] euclidean_distance")
    try:
        from novelty_search.distances import euclidean_distance

        all_passed &= test_result("(0,0) to (3,4) is 5", euclidean_distance([0, 0], [3, 4]) == 5.0)

    except Exception as e:
        all_passed &= test_result("euclidean_distance", False, str(e))

    # -------------------------------------------------------------------------
    # Test 2: NoveltyArchive generation cycle
    # -------------------------------------------------------------------------
    print("\n[2] NoveltyArchive")
    try:
        from novelty_search.archive import NoveltyArchive
        from novelty_search.exceptions import ProtocolError

        archive = NoveltyArchive(k_nearest_neighbors=1, archive_threshold=2, max_archive_size=2)

        archive.record([0, 0], "g1")
        archive.record([10, 0], "g2")
        sparsities = archive.compute_sparsities()
        all_passed &= test_result("Sibling-only sparsities", sparsities == [10.0, 10.0])

        try:
            archive.record([1, 1], "late")
            all_passed &= test_result("Record after compute rejected", False)
        except ProtocolError:
            all_passed &= test_result("Record after compute rejected", True)

        archive.finalize_generation()
        all_passed &= test_result("Both novel behaviors archived", archive.archive_length() == 2)

        archive.record([10, 0], "g3")
        all_passed &= test_result("Duplicate behavior has zero sparsity", archive.compute_sparsities() == [0.0])
        archive.finalize_generation()
        genomes = [entry.genome for entry in archive.snapshot_archive()]
        all_passed &= test_result("Archive unchanged by non-novel behavior", genomes == ["g1", "g2"])

    except Exception as e:
        all_passed &= test_result("NoveltyArchive", False, str(e))
        traceback.print_exc()

    # -------------------------------------------------------------------------
    # Test 3: NoveltyWrapper
    # -------------------------------------------------------------------------
    print("\n[3] NoveltyWrapper")
    try:
        from novelty_search.archive import NoveltyArchive
        from novelty_search.wrappers import NoveltyWrapper

        rng = np.random.default_rng(42)
        behaviors = {f"g{i}": list(rng.random(3) * 10) for i in range(40)}
        archive = NoveltyArchive(k_nearest_neighbors=3, archive_threshold=1, max_archive_size=15)
        ns = NoveltyWrapper(behavior_fn=behaviors.__getitem__, archive=archive)

        for start in range(0, 40, 10):
            scores = ns.score_generation([f"g{i}" for i in range(start, start + 10)])
        all_passed &= test_result("One score per genome", len(scores) == 10)
        all_passed &= test_result("Archive bounded", len(ns) <= 15)

    except Exception as e:
        all_passed &= test_result("NoveltyWrapper", False, str(e))
        traceback.print_exc()

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------
    print("\n" + "="*60)
    if all_passed:
        print("ALL SMOKE TESTS PASSED ✓")
        print("="*60 + "\n")
        return 0
    else:
        print("SOME TESTS FAILED ✗")
        print("="*60 + "\n")
        return 1


if __name__ == "__main__":
    exit_code = run_smoke_tests()
    sys.exit(exit_code)
