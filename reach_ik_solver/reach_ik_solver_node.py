#!/usr/bin/env python3

import argparse
import logging
import time
import numpy as np

from reach import ReachSession, calculate_chain_kinematics
from chain_config import physical as phys_config
from chain_config import system as sys_config

from .circular_target import CircularTarget

logger = logging.getLogger(sys_config.LOGGER_HOST)


class ReachIKSolverNode:
    """Command-line host: feeds targets into one session and reports the chain."""

    def __init__(self, options: argparse.Namespace):
        self.segment_length = options.segment_length
        self.segment_count = options.segment_count
        self.steps = options.steps
        self.rate = options.rate
        self.reset_every = options.reset_every
        self.realtime = options.realtime

        self.fixed_target = None
        if options.target is not None:
            self.fixed_target = np.array(options.target, dtype=np.float64)

        self.target_path = CircularTarget(
            radius=options.radius,
            center=options.center,
            period=options.period
        )

        self.session = ReachSession()
        self.failures = 0

        logger.info('Reach IK Solver started')
        logger.info(f'  Segments: {self.segment_count} x {self.segment_length}')
        logger.info(f'  Steps: {self.steps} at {self.rate}Hz')
        if self.fixed_target is not None:
            logger.info(f'  Fixed target: {self.fixed_target.tolist()}')
        else:
            logger.info(f'  Circular target: radius {options.radius}, center {list(options.center)}')

    def targets(self):
        """Yield (step, target) for every invocation."""
        if self.fixed_target is not None:
            for step in range(self.steps):
                yield step, self.fixed_target
        else:
            for step, _, position in self.target_path.sample(self.steps, self.rate):
                yield step, position

    def process_target(self, step: int, target: np.ndarray) -> dict:
        """Run one invocation and log what came back."""
        reset = self.reset_every > 0 and step > 0 and step % self.reset_every == 0

        result = self.session.invoke(self.segment_length, self.segment_count, target, reset)

        for message in result['messages']:
            logger.info(f'  {message}')

        if result['lines'] is None:
            self.failures += 1
            logger.warning(f'Step {step}: no lines produced')
            return result

        summary = calculate_chain_kinematics(self.session.chain)
        logger.info(
            f'Step {step}: target ({target[0]:.3f}, {target[1]:.3f}, {target[2]:.3f}), '
            f'tip error {summary["tip_error"]:.4f}'
            f'{"" if summary["reachable"] else " (out of reach)"}'
        )
        for i, (start, end) in enumerate(result['lines']):
            logger.debug(f'  Line {i}: {start.tolist()} -> {end.tolist()}')

        return result

    def run(self) -> int:
        for step, target in self.targets():
            self.process_target(step, target)
            if self.realtime:
                time.sleep(1.0 / self.rate)

        logger.info(f'Done: {self.steps} steps, {self.failures} failed')
        return 1 if self.failures else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Drive a reach chain toward a moving target and report its lines.'
    )
    parser.add_argument('--segment-length', type=float, default=phys_config.SEGMENT_LENGTH)
    parser.add_argument('--segment-count', type=int, default=phys_config.NUM_SEGMENTS)
    parser.add_argument('--steps', type=int, default=sys_config.STEPS)
    parser.add_argument('--rate', type=float, default=sys_config.PUBLISH_RATE,
                        help='Target updates per second (Hz)')
    parser.add_argument('--radius', type=float, default=sys_config.TARGET_RADIUS)
    parser.add_argument('--center', type=float, nargs=3, metavar=('X', 'Y', 'Z'),
                        default=list(sys_config.TARGET_CENTER))
    parser.add_argument('--period', type=float, default=sys_config.TARGET_PERIOD,
                        help='Seconds per full circle')
    parser.add_argument('--target', type=float, nargs=3, metavar=('X', 'Y', 'Z'),
                        default=None, help='Use a fixed target instead of the circle')
    parser.add_argument('--reset-every', type=int, default=0,
                        help='Rebuild the chain every N steps (0 = never)')
    parser.add_argument('--realtime', action='store_true',
                        help='Sleep between steps to match --rate')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def main(args=None):
    options = build_parser().parse_args(args)
    logging.basicConfig(level=getattr(logging, options.log_level), format=sys_config.LOG_FORMAT)

    if options.rate <= 0 or options.period <= 0:
        logger.error(f'Rate and period must be positive, got {options.rate} and {options.period}')
        return 2

    node = ReachIKSolverNode(options)
    try:
        return node.run()
    except KeyboardInterrupt:
        return 130
    finally:
        node.session.close()


if __name__ == '__main__':
    raise SystemExit(main())
