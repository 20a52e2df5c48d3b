# ebfs/cli.py
from __future__ import annotations
import argparse, csv, logging, os, os.path
from typing import List, Optional, Tuple

from .grid import Grid
from .replay import RunStats, SearchConfig, SearchMode, SearchSession, run_eager
from .viz import draw_search_png

logger = logging.getLogger(__name__)

def format_stats(name: str, s: RunStats) -> str:
    return (f"{name:20s} | reached={s.reached!s:5s} | steps={s.steps:5d} | "
            f"visited={s.visited:5d} | early_exit={s.early_exit_visited:5d} | "
            f"path={s.path_length:4d} | time={s.elapsed_sec*1000:7.2f} ms")

def run_env(path: Optional[str], png: Optional[str] = None) -> Tuple[str, RunStats]:
    if path:
        grid, origin, target = Grid.load(path)
        name = os.path.splitext(os.path.basename(path))[0]
    else:
        cfg = SearchConfig()
        grid, origin, target = Grid(cfg.width, cfg.height), cfg.origin, cfg.target
        name = "default"
    session = run_eager(grid, origin, target)
    if png:
        draw_search_png(session, png)
        logger.info("wrote %s", png)
    return name, session.stats()

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> None:
    os.makedirs(args.out, exist_ok=True)
    origin, target = (0, 0), (args.width - 1, args.height - 1)
    for i in range(args.count):
        seed = (args.seed + i) if args.seed is not None else None
        grid = Grid.random(args.width, args.height, p_wall=args.p, seed=seed, keep_open=(origin, target))
        path = os.path.join(args.out, f"grid_{i:03d}.txt")
        grid.save(path, origin, target)
        print("wrote", path)

def cmd_run(args: argparse.Namespace) -> None:
    name, st = run_env(args.env, png=args.png)
    print(format_stats(name, st))

def cmd_bench(args: argparse.Namespace) -> None:
    envs = sorted(p for p in os.listdir(args.envdir) if p.endswith(".txt"))
    if args.out:
        os.makedirs(args.out, exist_ok=True)
    rows: List[dict] = []
    for fname in envs:
        base = os.path.splitext(fname)[0]
        png = os.path.join(args.out, f"{base}.png") if args.out else None
        _, st = run_env(os.path.join(args.envdir, fname), png=png)
        print(f"{fname} :: {format_stats(base, st)}")
        rows.append({
            "env": fname,
            "reached": st.reached,
            "steps": st.steps,
            "visited": st.visited,
            "early_exit_visited": st.early_exit_visited,
            "path_length": st.path_length,
            "time_sec": round(st.elapsed_sec, 6),
        })
    if args.csv and rows:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)

def build_session(args: argparse.Namespace) -> SearchSession:
    mode = SearchMode(args.mode)
    if args.load:
        cfg = SearchConfig.from_file(args.load, mode=mode, cell_size=args.cell)
    else:
        cfg = SearchConfig(args.width, args.height, mode=mode, cell_size=args.cell)
        # keep the default target on small grids
        cfg.target = (min(cfg.target[0], args.width - 1), min(cfg.target[1], args.height - 1))
    if args.origin:
        cfg.origin = tuple(args.origin)
    if args.target:
        cfg.target = tuple(args.target)
    return SearchSession(cfg)

def add_viewer_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--load", type=str, default=None, help="Load a grid file (.txt)")
    parser.add_argument("--width", type=int, default=15, help="Grid width when not loading a file")
    parser.add_argument("--height", type=int, default=15, help="Grid height when not loading a file")
    parser.add_argument("--cell", type=int, default=40, help="Cell size in pixels")
    parser.add_argument("--origin", type=int, nargs=2, metavar=("X", "Y"), default=None, help="Search origin")
    parser.add_argument("--target", type=int, nargs=2, metavar=("X", "Y"), default=None, help="Search target")
    parser.add_argument("--mode", choices=[m.value for m in SearchMode], default=SearchMode.EAGER.value)
    parser.add_argument("--fps", type=int, default=60, help="Frames per second")
    parser.add_argument("--speed", type=float, default=10.0, help="Autoplay speed in steps/sec")

def cmd_view(args: argparse.Namespace) -> None:
    from .pygame_viewer import run_viewer  # pygame only when viewing
    run_viewer(args)

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Early-exit breadth-first search on a grid")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate random grid files")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--width", type=int, default=15)
    g.add_argument("--height", type=int, default=15)
    g.add_argument("--p", type=float, default=0.30)
    g.add_argument("--out", type=str, default="envs")
    g.add_argument("--seed", type=int, default=None)
    g.set_defaults(func=cmd_gen)

    r = sub.add_parser("run", help="run the eager search on one grid file")
    r.add_argument("--env", type=str, default=None, help="grid file; default 15x15 empty grid")
    r.add_argument("--png", type=str, default=None, help="write a heat-map PNG here")
    r.set_defaults(func=cmd_run)

    b = sub.add_parser("bench", help="run every .txt grid in a folder")
    b.add_argument("--envdir", type=str, required=True)
    b.add_argument("--out", type=str, default="", help="folder for heat-map PNGs")
    b.add_argument("--csv", type=str, default="")
    b.set_defaults(func=cmd_bench)

    v = sub.add_parser("view", help="interactive pygame viewer")
    add_viewer_args(v)
    v.set_defaults(func=cmd_view)

    return p

def main(argv: Optional[List[str]] = None) -> None:
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s: %(message)s")
    try:
        args.func(args)
    except (OSError, ValueError) as e:
        ap.error(str(e))
