import sys
from twap.log_handler import logger
from twap.manager import TWAPManager
from twap.reader import FeedReader


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        sys.stderr.write("ERROR: Please specify file name as argument.\n")
        return 1

    file_name = argv[0]
    logger.info("<green>Reading feed from {}</green>", file_name)

    reader = FeedReader(file_name)
    try:
        feed = reader.open()
    except OSError as e:
        logger.error("Unable to read {}: {}", file_name, e)
        return 1

    with feed:
        try:
            TWAPManager(reader.read_lines(feed)).run()
        except BrokenPipeError:
            # downstream reader (e.g. `head`) went away
            logger.warning("Output closed before feed {} was fully processed", file_name)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
