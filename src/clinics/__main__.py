from __future__ import annotations

import argparse

from .runtime.server import ClinicsServer, run


def main() -> None:
    p = argparse.ArgumentParser(prog="clinics", description="clinics: in-memory clinic registry server")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--log-level", default="info", choices=["critical", "error", "warning", "info", "debug", "trace"])
    p.add_argument("--access-log", action="store_true")
    args = p.parse_args()

    srv = run(host=args.host, port=args.port, log_level=args.log_level, access_log=args.access_log)
    print(srv.url if isinstance(srv, ClinicsServer) else srv.base_url)

    # Block forever (so it behaves like a normal CLI server)
    import time

    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
