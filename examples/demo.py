"""
prefixlog walkthrough.

Shows:
1. Leveled output with a prefix tag
2. Fluent reconfiguration (level, prefix, color)
3. Optional JSON file destination via LOG_FILE
4. panic() writing a stack trace and aborting

Run:
    python examples/demo.py
    LOG_LEVEL=debug LOG_FILE=demo.log python examples/demo.py
"""

from prefixlog import LoggerPanic, new_logger


def main():
    log = new_logger("demo")

    print("\n[1/4] Leveled output...")
    log.debug("only visible with LOG_LEVEL=debug")
    log.info("service started on port", 8080)
    log.warn("cache miss ratio high:", 0.42)
    log.error("upstream returned", 503)

    print("\n[2/4] Reconfiguring...")
    log.set_level("trace").set_prefix("demo.worker")
    log.trace("trace is on for", log.prefix)
    log.set_color()
    log.info("plain text, no ANSI codes")
    log.set_color(False)

    print("\n[3/4] Status...")
    for key, value in log.status().items():
        print(f"  {key}: {value}")

    print("\n[4/4] Panic...")
    try:
        log.panic("unrecoverable state")
    except LoggerPanic as exc:
        print(f"  aborted: {exc.message} ({len(exc.stack)} chars of stack)")
    finally:
        log.close()


if __name__ == "__main__":
    main()
