import logging

from owm_segment.config import Properties
from owm_segment.environment import HostEnvironment
from owm_segment.http_client import HTTPClient
from owm_segment.owm import Owm

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)


def main():
    segment = Owm(Properties(), HostEnvironment())
    try:
        if segment.is_available():
            print(segment.render())
    finally:
        HTTPClient.close()


if __name__ == "__main__":
    main()
