#!/usr/bin/env python3
"""Basic usage example"""

from pipelogger import LoggerBuilder, Logger, ConsoleTransport


def main():
    # Create logger with builder pattern
    logger = (LoggerBuilder()
        .with_id("example")
        .with_console(colored=True)
        .with_file("logs/example.log")
        .with_predefined_value("app", "demo")
        .build())

    # Log messages
    logger.info("Application started")
    logger.success("Connected to", {"host": "localhost", "port": 5432})
    logger.warn("This is warning")
    logger.error("This is error")

    # Only warnings and errors from now on
    logger.set_level("WARNING", "ERROR")
    logger.info("This is filtered out")

    # Forward everything, including filtered messages, to an audit logger
    audit = Logger({"console": ConsoleTransport()})
    pipe = logger.pipe(audit)
    pipe.enable_unmuting_messages()
    logger.info("Seen by audit only")

    pipe.destroy()
    logger.get_transport("file").close()


if __name__ == "__main__":
    main()
