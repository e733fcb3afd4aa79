#!/usr/bin/env python3
"""
Random fuzzer for tagtree.
Generates misnested and malformed template markup to test parser robustness.

Every input must either produce a tree or fail with MarkupSyntaxError; any
other exception or a parse taking longer than a few seconds is a failure.
Inputs built only from well-formed fragments must also round-trip exactly.
"""

import argparse
import logging
import random
import string
import sys
import time
import traceback

from tagtree import TagTree

TAGS = [
    "div", "span", "p", "a", "ul", "ol", "li", "table", "tr", "td", "form",
    "section", "article", "header", "footer", "nav", "b", "i", "em", "strong",
]
VOID_TAGS = ["br", "hr", "img", "input", "meta", "link", "source", "wbr"]
RAW_TEXT_TAGS = ["script", "style"]
ATTRIBUTES = ["id", "class", "href", "src", "alt", "title", "data-x", "aria-label", "disabled", "hidden"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    return "".join(random.choices([" ", "\t", "\n", "\r\n", ""], k=random.randint(0, 3)))


def fuzz_attribute():
    name = random.choice(ATTRIBUTES)
    styles = [
        lambda: name,
        lambda: f'{name}="{random_string()}"',
        lambda: f"{name}='{random_string()}'",
        lambda: f"{name}={random_string(1, 8)}",
        lambda: f"{name}=<%= {random_string(1, 5)} %>",  # Illegal unquoted value
        lambda: f'{name}="{random_string()}',  # Unclosed quote
        lambda: f"{name}==",
    ]
    return random.choice(styles)()


def fuzz_open_tag():
    tag = random.choice(TAGS + VOID_TAGS)
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 3)))
    closing = random.choice([">", ">", ">", "/>", " >", ""])
    return f"<{tag} {attrs}{closing}" if attrs else f"<{tag}{closing}"


def fuzz_close_tag():
    tag = random.choice(TAGS + VOID_TAGS)
    return random.choice([f"</{tag}>", f"</{tag} >", f"</{tag}", f"</ {tag}>"])


def fuzz_comment():
    return random.choice([
        f"<!--{random_string()}-->",
        f"<!-- a -- b {random_string()} -->",
        f"<!--{random_string()}",  # Unterminated
    ])


def fuzz_template_block():
    body = random_string(0, 15)
    return random.choice([
        f"<?php {body} ?>",
        f"<?= {body} ?>",
        f"<%= {body} %>",
        f"<% {body} %>",
        f"<?php {body}",  # Unterminated
    ])


def fuzz_raw_text():
    tag = random.choice(RAW_TEXT_TAGS)
    body = random.choice(["if (a<b) {}", "a > b", "</div>", random_string()])
    closing = random.choice([f"</{tag}>", f"</{tag.upper()}>", ""])
    return f"<{tag}>{body}{closing}"


def fuzz_text():
    return random.choice([random_string(1, 30), "a < b", "x & y", random_whitespace()])


def well_formed(depth=0, max_depth=5):
    """Generate a fragment that must parse without errors and round-trip."""
    choice = random.random()
    if depth >= max_depth or choice < 0.3:
        return random.choice([
            random_string(1, 10),
            f"<{random.choice(VOID_TAGS)}>",
            f"<!--{random_string()}-->",
            f"<?php {random_string()} ?>",
            f"<%= {random_string()} %>",
        ])
    tag = random.choice(TAGS)
    attr = f' class="{random_string(1, 6)}"' if random.random() < 0.3 else ""
    children = "".join(well_formed(depth + 1, max_depth) for _ in range(random.randint(0, 3)))
    return f"<{tag}{attr}>{children}</{tag}>"


def generate_fuzzed_markup():
    parts = []
    if random.random() < 0.3:
        parts.append("<!DOCTYPE html>")
    for _ in range(random.randint(1, 20)):
        generator = random.choices(
            [fuzz_open_tag, fuzz_close_tag, fuzz_comment, fuzz_template_block, fuzz_raw_text, fuzz_text, well_formed],
            weights=[25, 20, 5, 8, 5, 15, 10],
        )[0]
        parts.append(generator())
    return "".join(parts)


def run_fuzzer(num_tests, seed=None, verbose=False):
    """Run the fuzzer. Returns True when no crash, hang or round-trip failure was found."""
    if seed is not None:
        random.seed(seed)

    failures = []
    parsed = 0
    rejected = 0
    print(f"Fuzzing tagtree with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        exact = random.random() < 0.25
        markup = well_formed() if exact else generate_fuzzed_markup()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            doc = TagTree(markup)
            elapsed = time.perf_counter() - start
        except Exception as e:
            failures.append((i, markup, f"crash: {e}", traceback.format_exc()))
            continue

        if elapsed > 5.0:
            failures.append((i, markup, f"hang: {elapsed:.2f}s", ""))
        elif doc.root is None:
            rejected += 1
            if exact:
                failures.append((i, markup, f"well-formed input rejected: {doc.syntax_error.message}", ""))
        else:
            parsed += 1
            # Serializing touches every node
            text = doc.root.to_text()
            if exact and (doc.errors or text != markup):
                failures.append((i, markup, "well-formed input did not round-trip", text))

    elapsed_total = time.time() - start_time

    print(f"\n{'=' * 60}")
    print("FUZZING RESULTS")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Parsed:         {parsed}")
    print(f"Syntax errors:  {rejected}")
    print(f"Failures:       {len(failures)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    for test_num, markup, reason, detail in failures[:10]:
        print(f"\nTest #{test_num}: {reason}")
        print(f"  Input: {markup[:200]!r}")
        if detail:
            print(f"  {detail[:500]}")

    return not failures


def main():
    parser = argparse.ArgumentParser(description="Fuzz tagtree with malformed template markup")
    parser.add_argument("--num-tests", "-n", type=int, default=1000, help="Number of test cases (default: 1000)")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--sample", type=int, metavar="N", help="Just print N sample inputs (no parsing)")
    args = parser.parse_args()

    # Recovery warnings and syntax errors are expected here
    logging.getLogger("tagtree").setLevel(logging.CRITICAL)

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_markup())
            print()
        return

    sys.exit(0 if run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose) else 1)


if __name__ == "__main__":
    main()
