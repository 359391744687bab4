from ircserv.logger import STDERR_FILENO, IRCLogger, get_logger


def test_error_line_format():
    logger = IRCLogger()
    logger.error("boom")
    assert logger.log == "\033[31mERROR\033[0m: boom\n"


def test_info_line_format():
    logger = IRCLogger()
    logger.info("Usage: ircserv <port> <password>")
    assert logger.log == "\033[36mINFO\033[0m: Usage: ircserv <port> <password>\n"


def test_debug_line_format_when_enabled():
    logger = IRCLogger(debug=True)
    logger.debug("Ready: 1")
    assert logger.log == "\033[30mDEBUG: Ready: 1\033[0m\n"


def test_debug_suppressed_when_disabled():
    logger = IRCLogger(debug=False)
    logger.debug("hidden")
    assert logger.log == ""


def test_write_appends_in_order():
    logger = IRCLogger()
    logger.write("abc").write(42)
    assert logger.log == "abc42"


def test_consume_partial_returns_remaining_length():
    logger = IRCLogger()
    logger.write("abcdef")
    remaining = logger.consume(2)
    assert remaining == len(logger.log)
    assert logger.log == "cdef"


def test_consume_more_than_available_clears():
    logger = IRCLogger()
    logger.write("abc")
    assert logger.consume(100) == 0
    assert logger.log == ""


def test_consume_exact_length_empties():
    logger = IRCLogger()
    logger.write("abc")
    assert logger.consume(3) == 0
    assert logger.log == ""


def test_default_fd_is_stderr():
    assert IRCLogger().fd == STDERR_FILENO


def test_get_logger_shares_one_buffer():
    first = get_logger()
    first.write("singleton-marker")
    try:
        assert get_logger().log.endswith("singleton-marker")
    finally:
        assert first.consume(len(first.log)) == 0
    assert get_logger().log == ""