# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import argparse

from keystone.app import create_app


def main() -> None:
    parser = argparse.ArgumentParser(prog="keystone", description="Run the keystone API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    create_app().run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
