"""
Command-line interface for ikarbiter.

Provides commands for inspecting arm configurations and ranking candidate
IK solutions offline.
"""

from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.table import Table

from ikarbiter import __version__
from ikarbiter.core.config import ArmConfig, ConfigManager
from ikarbiter.core.exceptions import IKArbiterError
from ikarbiter.core.logging import configure_logging
from ikarbiter.core.types import CandidateSolution, JointLimit
from ikarbiter.kinematics.chain import CompasChainEvaluator
from ikarbiter.motion.collision import ConfigurationValidator, FreeSpaceOracle
from ikarbiter.motion.limits import JointLimitValidator
from ikarbiter.motion.ranking import SolutionRanker
from ikarbiter.motion.scoring import WeightedDistanceScorer

console = Console()


def _limit_table(arm: ArmConfig, config_dir: Path) -> tuple[JointLimit, ...]:
    """Config limits, falling back to the arm's URDF when one is configured."""
    if all(name in arm.joint_limits for name in arm.joint_names) or not arm.urdf_path:
        return arm.limit_table()

    urdf_path = Path(arm.urdf_path)
    if not urdf_path.is_absolute():
        urdf_path = config_dir / urdf_path
    chain = CompasChainEvaluator.from_urdf(urdf_path, arm.root_frame, arm.tip_frame)
    return arm.limit_table(chain.joint_limits())


def _parse_posture(text: str) -> tuple[float, ...]:
    try:
        return tuple(float(v) for v in text.split(","))
    except ValueError:
        raise click.BadParameter(f"expected comma-separated numbers, got '{text}'")


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config-dir",
    type=click.Path(exists=True, path_type=Path),
    default="config",
    help="Configuration directory",
)
@click.option("--log-level", default="WARNING", help="Minimum log level")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines")
@click.pass_context
def main(ctx: click.Context, config_dir: Path, log_level: str, json_logs: bool) -> None:
    """ikarbiter - IK solution arbitration for 6-DOF arms."""
    configure_logging(level=log_level, json_output=json_logs)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


@main.command("arms")
@click.pass_context
def list_arms(ctx: click.Context) -> None:
    """List available arm configurations."""
    try:
        config_mgr = ConfigManager(ctx.obj["config_dir"])
        arms = config_mgr.list_arms()
    except IKArbiterError as e:
        console.print(f"[red]✗[/red] Failed to list arms: {e}")
        raise SystemExit(1)

    if not arms:
        console.print("[yellow]No arm configurations found.[/yellow]")
        return

    table = Table(title="Available Arms")
    table.add_column("Name", style="cyan")
    table.add_column("Manufacturer")
    table.add_column("Root -> Tip")
    for name in arms:
        arm = config_mgr.get_arm(name)
        table.add_row(name, arm.manufacturer or "-", f"{arm.root_frame} -> {arm.tip_frame}")
    console.print(table)


@main.command("info")
@click.argument("arm_name")
@click.pass_context
def arm_info(ctx: click.Context, arm_name: str) -> None:
    """Show joint order, limits and scoring weights of an arm."""
    try:
        config_dir = ctx.obj["config_dir"]
        arm = ConfigManager(config_dir).get_arm(arm_name)
        limits = _limit_table(arm, config_dir)
    except IKArbiterError as e:
        console.print(f"[red]✗[/red] Failed to load arm: {e}")
        raise SystemExit(1)

    table = Table(title=f"Arm: {arm.name}")
    table.add_column("#", justify="right")
    table.add_column("Joint", style="cyan")
    table.add_column("Min (rad)", justify="right")
    table.add_column("Max (rad)", justify="right")
    table.add_column("Weight", justify="right")
    for i, (name, limit, weight) in enumerate(
        zip(arm.joint_names, limits, arm.joint_weights), start=1
    ):
        table.add_row(
            str(i), name, f"{limit.min_position:.4f}", f"{limit.max_position:.4f}", f"{weight:g}"
        )
    console.print(table)

    if arm.constraints:
        console.print(f"Goal constraints: {len(arm.constraints)}")


@main.command("rank")
@click.argument("arm_name")
@click.argument("candidates_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--current",
    "-c",
    default="0,0,0,0,0,0",
    help="Current posture as comma-separated joint values",
)
@click.pass_context
def rank(ctx: click.Context, arm_name: str, candidates_file: Path, current: str) -> None:
    """Rank candidate solutions from a YAML file (free space, no obstacles)."""
    posture = _parse_posture(current)
    try:
        config_dir = ctx.obj["config_dir"]
        arm = ConfigManager(config_dir).get_arm(arm_name)
        limits = _limit_table(arm, config_dir)
        data = yaml.safe_load(candidates_file.read_text()) or {}
        candidates = [CandidateSolution(tuple(c)) for c in data.get("candidates", [])]

        ranker = SolutionRanker(
            JointLimitValidator(limits),
            ConfigurationValidator(),
            WeightedDistanceScorer(arm.joint_weights),
        )
        result = ranker.rank(
            posture, candidates, FreeSpaceOracle(arm.joint_names, arm.constraints)
        )
    except (IKArbiterError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]✗[/red] Ranking failed: {e}")
        raise SystemExit(1)

    if result.is_empty:
        console.print(f"[yellow]No valid solution:[/yellow] {result.reason.value}")
        raise SystemExit(1)

    table = Table(title=f"Ranked solutions for {arm.name}")
    table.add_column("Rank", justify="right")
    table.add_column("Joints")
    table.add_column("Cost", justify="right", style="cyan")
    for i, scored in enumerate(result, start=1):
        table.add_row(
            str(i), ", ".join(f"{v:.4f}" for v in scored.joints), f"{scored.cost:.6f}"
        )
    console.print(table)


if __name__ == "__main__":
    main()
