import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, TextIO

from tqdm import tqdm

from heartmaze.common.config_loader import LOG_LEVELS, load_config
from heartmaze.common.errors import ConfigurationError
from heartmaze.common.log import setup_logging
from heartmaze.config.difficulty import DIFFICULTY_PROFILES
from heartmaze.eval_core.validator import MazeValidator
from heartmaze.game.session import Scene, Session
from heartmaze.game.state import Direction, GameState, MoveResult, MoveStatus
from heartmaze.maze_gen.generator import START, describe, shortest_path
from heartmaze.report.generator import render_text, save_snapshot

logger = logging.getLogger(__name__)

HELP = 'w/a/s/d move, n new maze, easy|medium|hard change difficulty, q quit'


def path_to_directions(path: List) -> List[Direction]:
    by_delta = {d.value: d for d in Direction}
    return [by_delta[(x1-x0, y1-y0)] for (x0, y0), (x1, y1) in zip(path, path[1:])]


def run_autoplay(cfg: Dict, out: TextIO, snapshot: Optional[str] = None) -> Dict:
    state = GameState(cfg['difficulty'], seed=cfg['seed'])
    route = shortest_path(state.grid, START, state.goal)
    result: Optional[MoveResult] = None
    for d in path_to_directions(route):
        result = state.move(d)
    summary = {
        'difficulty': state.difficulty,
        'size': f'{state.width}x{state.height}',
        'status': result.status.value if result else MoveStatus.BLOCKED.value,
        'moves': state.move_count,
        'won': state.won,
    }
    if snapshot:
        save_snapshot(snapshot, state, cfg.get('cell_px'))
        summary['snapshot'] = snapshot
    out.write(render_text(state) + '\n')
    out.write(json.dumps(summary, ensure_ascii=False) + '\n')
    return summary


def generate_mazes_to_dir(cfg: Dict, outdir: Path, count: int, png: bool = False) -> List[Dict]:
    outdir.mkdir(parents=True, exist_ok=True)
    base_seed = cfg['seed']
    items = []
    for i in tqdm(range(count), desc='Generate'):
        seed = base_seed + i if base_seed is not None else None
        state = GameState(cfg['difficulty'], seed=seed)
        check = MazeValidator(state.grid).check_structure()
        if not check['ok']:
            logger.error('maze %d failed structure check: %s', i, check['error'])
        maze = describe(state.grid, seed=seed)
        stem = f"maze_{state.difficulty}_{state.width}x{state.height}_{i}"
        (outdir / f'{stem}.json').write_text(json.dumps(maze, ensure_ascii=False), encoding='utf-8')
        if png:
            save_snapshot(str(outdir / f'{stem}.png'), state, cfg.get('cell_px'))
        items.append({'file': f'{stem}.json', 'ok': check['ok'], 'path_len': len(maze['shortest_path']) - 1})
    (outdir / 'summary.json').write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding='utf-8')
    return items


def run_play(cfg: Dict, inp: TextIO, out: TextIO) -> Session:
    session = Session(cfg['difficulty'], seed=cfg['seed'])
    session.on_render(lambda st: out.write(render_text(st) + '\n'))
    session.on_cue(lambda name: logger.debug('cue %s', name))

    def _scene(scene: Scene) -> None:
        if scene is Scene.WIN:
            out.write(f'You made it in {session.state.move_count} moves! (n to play again)\n')

    session.on_scene(_scene)
    session.accept()
    out.write(HELP + '\n')
    session.enter_game()
    for line in inp:
        cmd = line.strip()
        if not cmd:
            continue
        if cmd in ('q', 'quit'):
            break
        if cmd in ('n', 'new'):
            if session.scene is Scene.WIN:
                session.play_again()
            else:
                session.new_maze()
        elif cmd.lower() in DIFFICULTY_PROFILES:
            session.set_difficulty(cmd.lower())
        elif cmd in ('m', 'mute'):
            out.write('muted\n' if session.toggle_mute() else 'unmuted\n')
        else:
            for key in cmd:
                res = session.handle_key(key)
                if res is not None and res.status is MoveStatus.BLOCKED:
                    out.write('bump\n')
    return session


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', default=None, help='path to config.yaml')
    common.add_argument('--difficulty', choices=list(DIFFICULTY_PROFILES), default=None)
    common.add_argument('--seed', type=int, default=None)
    common.add_argument('--log-level', choices=list(LOG_LEVELS), default=None)

    ap = argparse.ArgumentParser(prog='heartmaze', description='Heart maze: generate and play random perfect mazes')
    sub = ap.add_subparsers(dest='command')
    sub.add_parser('play', parents=[common], help='play in the terminal')
    auto = sub.add_parser('autoplay', parents=[common], help='walk the shortest path to the goal')
    auto.add_argument('--snapshot', default=None, help='write a PNG of the final board')
    gen = sub.add_parser('generate', parents=[common], help='write mazes as JSON')
    gen.add_argument('--count', type=int, default=5)
    gen.add_argument('--outdir', default=None)
    gen.add_argument('--png', action='store_true')
    return ap


def resolve_config(args: argparse.Namespace) -> Dict:
    cfg = load_config(args.config)
    for key in ('difficulty', 'seed', 'log_level'):
        v = getattr(args, key, None)
        if v is not None:
            cfg[key] = v
    return cfg


def main(argv: Optional[List[str]] = None, inp: Optional[TextIO] = None, out: Optional[TextIO] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0].startswith('-') and argv[0] not in ('-h', '--help'):
        argv.insert(0, 'play')
    args = build_parser().parse_args(argv)
    inp = inp or sys.stdin
    out = out or sys.stdout
    try:
        cfg = resolve_config(args)
        setup_logging(cfg['log_level'])
        if args.command == 'autoplay':
            run_autoplay(cfg, out, snapshot=args.snapshot)
        elif args.command == 'generate':
            outdir = Path(args.outdir or cfg.get('output_dir') or 'outputs')
            generate_mazes_to_dir(cfg, outdir, args.count, png=args.png)
            out.write(f'Done. Mazes saved to {outdir}\n')
        else:
            run_play(cfg, inp, out)
    except ConfigurationError as e:
        logger.error('%s', e)
        out.write(f'error: {e}\n')
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
