#!/usr/bin/env python3
"""
memreason - Memory-backed Symbolic Reasoning System
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from memreason.integration.layer import IntegrationLayer
from memreason.integration.models import ConfidenceAssessment
from memreason.memory.memory_store import InMemoryMemoryStore
from memreason.memory.models import MemoryRecord
from memreason.reasoning.engine import ReasoningEngine
from memreason.reasoning.models import ReasoningRequest, ReasoningResult
from memreason.tools.dispatcher import ToolDispatcher

# Setup logger
logger = logging.getLogger(__name__)

INTERACTIVE_ALIASES = {
    "assess": "assess_confidence",
}


def load_config(config_path: str = "config/config.yaml") -> dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
        return config or {}
    except FileNotFoundError:
        print(f"❌ Configuration file not found: {config_path}")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"❌ Error parsing configuration file: {e}")
        sys.exit(1)


def setup_logging(config: dict):
    """Setup logging configuration."""
    log_config = config.get("logging", {})
    log_level = getattr(logging, log_config.get("level", "INFO"))
    log_format = log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Create logs directory if it doesn't exist
    log_file = log_config.get("file", "logs/memreason.log")
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


def parse_reason_command(text: str) -> dict:
    """Parse 'premise; premise => goal [| method]' into reason tool arguments."""
    method = "forward"
    if "|" in text:
        text, method = text.rsplit("|", 1)
        method = method.strip()
    if "=>" not in text:
        raise ValueError("Expected 'premise; premise => goal'")
    premises_text, goal = text.split("=>", 1)
    premises = [p.strip() for p in premises_text.split(";") if p.strip()]
    return {"premises": premises, "goal": goal.strip(), "method": method}


class MemoryReasoningSystem:
    """Main memory and reasoning system class."""

    def __init__(self, config: dict):
        self.config = config
        self.console = Console()

        memory_config = config.get("memory", {})
        storage_path = memory_config.get("storage_path")
        self.recall_limit = memory_config.get("default_limit", 10)

        # Initialize components
        self.memory = InMemoryMemoryStore(Path(storage_path) if storage_path else None)
        self.reasoning = ReasoningEngine(config.get("reasoning", {}), memory_store=self.memory)
        self.integration = IntegrationLayer(self.memory, self.reasoning, config.get("integration", {}))
        self.tools = ToolDispatcher(self.memory, self.reasoning, self.integration)

        self.debug_mode = config.get("debug", {}).get("enabled", False)

    async def reason(self, premises: List[str], goal: str, method: str = "forward") -> ReasoningResult:
        request = ReasoningRequest(premises=premises, goal=goal, method=method)
        return await self.reasoning.reason(request)

    async def reflect(self, topic: str, depth: str = "surface") -> str:
        return await self.integration.reflect(topic, depth)

    async def assess(self, statement: str, evidence: List[str]) -> ConfidenceAssessment:
        return await self.integration.assess_confidence(statement, evidence)

    async def remember(self, content: str, context: str = "general", emotional_weight: float = 0.0) -> MemoryRecord:
        return await self.memory.store(MemoryRecord(
            content=content,
            context=context,
            emotional_weight=emotional_weight,
        ))

    async def recall(self, query: str, context: Optional[str] = None) -> List[MemoryRecord]:
        return await self.memory.search(query, context, self.recall_limit)

    def display_reasoning_result(self, result: ReasoningResult):
        """Display a reasoning result in a formatted way."""
        status = "[green]found[/green]" if result.found else "[red]not found[/red]"
        self.console.print(Panel(
            f"{result.conclusion}\n\nStatus: {status}\nConfidence: {result.confidence:.2f}",
            title=f"[bold blue]Reasoning Result ({result.method})[/bold blue]",
            border_style="blue"
        ))

        if result.steps:
            steps_table = Table(title="Reasoning Steps")
            steps_table.add_column("#", style="cyan")
            steps_table.add_column("Step", style="white")
            for i, step in enumerate(result.steps, 1):
                steps_table.add_row(str(i), step)
            self.console.print(steps_table)

        if result.explanations:
            explanation_table = Table(title="Candidate Explanations")
            explanation_table.add_column("Rule", style="cyan")
            explanation_table.add_column("Premises", style="white")
            explanation_table.add_column("Confidence", style="green")
            explanation_table.add_column("Plausibility", style="yellow")
            for explanation in result.explanations:
                explanation_table.add_row(
                    explanation.rule,
                    " & ".join(explanation.premises),
                    f"{explanation.confidence:.2f}",
                    f"{explanation.plausibility:.2f}",
                )
            self.console.print(explanation_table)

    def display_assessment(self, assessment: ConfidenceAssessment):
        """Display a confidence assessment in a formatted way."""
        breakdown_table = Table(title=f"Confidence Assessment: {assessment.level.value} ({assessment.score:.2f})")
        breakdown_table.add_column("Factor", style="cyan")
        breakdown_table.add_column("Weighted Score", style="white")
        for factor, value in assessment.breakdown.items():
            breakdown_table.add_row(factor, f"{value:.3f}")
        self.console.print(breakdown_table)

        for factor in assessment.factors:
            self.console.print(f"  • {factor}")

    def display_memories(self, memories: List[MemoryRecord]):
        table = Table(title=f"Found {len(memories)} relevant memories")
        table.add_column("Content", style="white")
        table.add_column("Context", style="cyan")
        table.add_column("Confidence", style="green")
        table.add_column("Timestamp", style="dim")
        for memory in memories:
            table.add_row(
                memory.content,
                memory.context,
                f"{memory.confidence:.2f}",
                memory.timestamp.isoformat(timespec="seconds"),
            )
        self.console.print(table)

    async def show_stats(self):
        """Display system statistics."""
        reasoning_stats = self.reasoning.get_reasoning_stats()
        memory_stats = await self.memory.get_memory_stats()

        reasoning_table = Table(title="Reasoning Engine Statistics")
        reasoning_table.add_column("Metric", style="cyan")
        reasoning_table.add_column("Value", style="white")
        reasoning_table.add_row("Total Rules", str(reasoning_stats["total_rules"]))
        reasoning_table.add_row("Total Facts", str(reasoning_stats["total_facts"]))
        reasoning_table.add_row("Reasoning Sessions", str(reasoning_stats["reasoning_sessions"]))

        rule_table = Table(title="Rule Statistics")
        rule_table.add_column("Rule", style="cyan")
        rule_table.add_column("Usage", style="white")
        rule_table.add_column("Success Rate", style="green")
        rule_table.add_column("Confidence", style="yellow")
        for rule in reasoning_stats["rule_statistics"]:
            confidence = rule["confidence"]
            rule_table.add_row(
                rule["name"],
                str(rule["usage_count"]),
                f"{rule['success_rate']:.2f}",
                f"{confidence:.2f}" if confidence is not None else "computed",
            )

        memory_table = Table(title="Memory Statistics")
        memory_table.add_column("Metric", style="cyan")
        memory_table.add_column("Value", style="white")
        memory_table.add_row("Total Memories", str(memory_stats["total_memories"]))
        for memory_type, count in memory_stats["memory_types"].items():
            memory_table.add_row(f"Type: {memory_type}", str(count))
        memory_table.add_row("Stored Reasoning Sessions", str(memory_stats["reasoning_sessions"]))

        self.console.print(reasoning_table)
        self.console.print(rule_table)
        self.console.print(memory_table)

    async def interactive_mode(self):
        """Run the system in interactive mode."""
        self.console.print(Panel(
            "[bold blue]memreason[/bold blue]\n"
            "Store memories, reason over them and reflect.\n"
            "Type 'quit' to exit, 'stats' for system statistics, 'help' for commands.",
            border_style="blue"
        ))

        while True:
            try:
                line = click.prompt("\nCommand").strip()

                if line.lower() in ['quit', 'exit', 'q']:
                    break
                elif line.lower() == 'stats':
                    await self.show_stats()
                    continue
                elif line.lower() == 'help':
                    self.console.print("""
                    [bold]Available Commands:[/bold]
                    • remember <text>
                    • recall <query>
                    • reflect <topic>
                    • assess <statement>
                    • reason <premise>; <premise> => <goal> [| forward|backward|abductive]
                    • 'stats' - Show system statistics
                    • 'quit' - Exit the system
                    """)
                    continue
                elif not line:
                    continue

                command, _, text = line.partition(" ")
                name = INTERACTIVE_ALIASES.get(command.lower(), command.lower())
                text = text.strip()

                if name == "reason":
                    arguments = parse_reason_command(text)
                else:
                    argument_names = {
                        "remember": "content",
                        "recall": "query",
                        "reflect": "topic",
                        "assess_confidence": "statement",
                    }
                    arguments = {argument_names.get(name, "text"): text}

                output = await self.tools.call(name, arguments)
                self.console.print(Panel(output, border_style="green"))

            except KeyboardInterrupt:
                self.console.print("\n[yellow]Exiting...[/yellow]")
                break
            except Exception as e:
                self.console.print(f"[red]Error: {e}[/red]")


@click.group()
@click.option('--config', '-c', default='config/config.yaml', help='Configuration file path')
@click.option('--debug', '-d', is_flag=True, help='Enable debug mode')
@click.pass_context
def cli(ctx, config, debug):
    """memreason CLI."""
    ctx.ensure_object(dict)
    ctx.obj['config'] = load_config(config)
    ctx.obj['debug'] = debug

    # Setup logging
    setup_logging(ctx.obj['config'])

    # Enable debug mode in config
    if debug:
        ctx.obj['config'].setdefault('debug', {})['enabled'] = True
        logging.getLogger().setLevel(logging.DEBUG)


def _run(ctx, coroutine_factory):
    """Run a command coroutine, reporting errors instead of tracebacks."""
    system = MemoryReasoningSystem(ctx.obj['config'])
    try:
        asyncio.run(coroutine_factory(system))
    except Exception as e:
        system.console.print(f"[red]❌ {e}[/red]")
        ctx.exit(1)


@cli.command()
@click.argument('goal')
@click.option('--premise', '-p', 'premises', multiple=True, help='Premise to assert (repeatable)')
@click.option('--method', '-m', default='forward', help='forward, backward or abductive')
@click.pass_context
def reason(ctx, goal, premises, method):
    """Apply symbolic reasoning towards a goal."""
    async def run_reason(system):
        result = await system.reason(list(premises), goal, method)
        system.display_reasoning_result(result)

    _run(ctx, run_reason)


@cli.command()
@click.argument('topic')
@click.option('--depth', default='surface', help='surface, deep or philosophical')
@click.pass_context
def reflect(ctx, topic, depth):
    """Engage in meta-cognitive reflection on a topic."""
    async def run_reflect(system):
        report = await system.reflect(topic, depth)
        system.console.print(Panel(report, title="[bold blue]Reflection[/bold blue]", border_style="blue"))

    _run(ctx, run_reflect)


@cli.command()
@click.argument('statement')
@click.option('--evidence', '-e', multiple=True, help='Supporting evidence (repeatable)')
@click.pass_context
def assess(ctx, statement, evidence):
    """Evaluate confidence in a statement."""
    async def run_assess(system):
        assessment = await system.assess(statement, list(evidence))
        system.display_assessment(assessment)

    _run(ctx, run_assess)


@cli.command()
@click.argument('content')
@click.option('--context', default='general', help='Context or category')
@click.option('--emotional-weight', default=0.0, type=float, help='Emotional significance (0-1)')
@click.pass_context
def remember(ctx, content, context, emotional_weight):
    """Store information in memory."""
    async def run_remember(system):
        record = await system.remember(content, context, emotional_weight)
        system.console.print(f"[green]✅ Stored memory with ID: {record.id}[/green]")

    _run(ctx, run_remember)


@cli.command()
@click.argument('query')
@click.option('--context', default=None, help='Context to search within')
@click.pass_context
def recall(ctx, query, context):
    """Retrieve information from memory."""
    async def run_recall(system):
        memories = await system.recall(query, context)
        system.display_memories(memories)

    _run(ctx, run_recall)


@cli.command()
@click.pass_context
def stats(ctx):
    """Show system statistics."""
    async def run_stats(system):
        await system.show_stats()

    _run(ctx, run_stats)


@cli.command()
@click.pass_context
def interactive(ctx):
    """Start interactive mode."""
    system = MemoryReasoningSystem(ctx.obj['config'])
    asyncio.run(system.interactive_mode())


if __name__ == "__main__":
    cli()
