#!/usr/bin/env python3

"""
Ollama + Open WebUI Stack Manager
Installs Ollama and Open WebUI as two containers on a shared network and manages them afterwards.

Usage:
    python ollama_stack.py install [--replace | --keep] [--pull-model | --skip-model] [OPTIONS]
    python ollama_stack.py status
    python ollama_stack.py start
    python ollama_stack.py stop
    python ollama_stack.py logs --service SERVICE [-f]
    python ollama_stack.py pull [--model MODEL]
    python ollama_stack.py models
    python ollama_stack.py uninstall [--remove-network] [--remove-volumes]
"""

import sys
import argparse
from DecisionProvider import (
    ConsoleDecisions,
    FixedDecisions,
    PULL_MODEL,
    REPLACE_EXISTING,
)
from DockerRuntime import DockerRuntime, DEFAULT_RUNTIME_BINARY
from StackConfig import (
    StackConfig,
    DEFAULT_HOST,
    DEFAULT_MODEL,
    DEFAULT_NETWORK_NAME,
    DEFAULT_PROBE_ATTEMPTS,
    OLLAMA_HOST_PORT,
    OPEN_WEBUI_HOST_PORT,
)
from StackOrchestrator import StackOrchestrator

SERVICES = ["ollama", "open-webui"]


# ============================================================================
# Factory Functions
# ============================================================================
def build_config(args) -> StackConfig:
    """Build the stack configuration from the shared command-line options."""
    return StackConfig(
        network_name=args.network,
        host=args.host,
        default_model=args.model,
        ollama_host_port=args.ollama_port,
        webui_host_port=args.webui_port,
        probe_attempts=args.probe_attempts,
    )


def build_decisions(args):
    """Use scripted answers for every question answered on the command line."""
    answers = {}
    if getattr(args, "yes", False):
        answers = {REPLACE_EXISTING: True, PULL_MODEL: True}
    if getattr(args, "replace", None) is not None:
        answers[REPLACE_EXISTING] = args.replace
    if getattr(args, "pull_model", None) is not None:
        answers[PULL_MODEL] = args.pull_model

    if len(answers) == 2:
        return FixedDecisions(answers)
    return _PartiallyScriptedDecisions(answers)


class _PartiallyScriptedDecisions(ConsoleDecisions):
    """Scripted answers where given, the terminal for the rest."""

    def __init__(self, answers):
        super().__init__()
        self.answers = answers

    def confirm(self, key, question) -> bool:
        if key in self.answers:
            return self.answers[key]
        return super().confirm(key, question)


def build_parser():
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument('--runtime-binary', default=DEFAULT_RUNTIME_BINARY,
                        help=f'Container runtime CLI (default: {DEFAULT_RUNTIME_BINARY})')
    shared.add_argument('--network', default=DEFAULT_NETWORK_NAME,
                        help=f'Network name (default: {DEFAULT_NETWORK_NAME})')
    shared.add_argument('--ollama-port', type=int, default=OLLAMA_HOST_PORT,
                        help=f'Host port for Ollama (default: {OLLAMA_HOST_PORT})')
    shared.add_argument('--webui-port', type=int, default=OPEN_WEBUI_HOST_PORT,
                        help=f'Host port for Open WebUI (default: {OPEN_WEBUI_HOST_PORT})')
    shared.add_argument('--model', default=DEFAULT_MODEL,
                        help=f'Default model to download (default: {DEFAULT_MODEL})')
    shared.add_argument('--host', default=DEFAULT_HOST,
                        help=f'Host name used in printed URLs (default: {DEFAULT_HOST})')
    shared.add_argument('--probe-attempts', type=int, default=DEFAULT_PROBE_ATTEMPTS,
                        help=f'Readiness probe attempts (default: {DEFAULT_PROBE_ATTEMPTS})')

    parser = argparse.ArgumentParser(
        description="Ollama + Open WebUI Stack Manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive install
  python ollama_stack.py install

  # Unattended reinstall, downloading the default model
  python ollama_stack.py install --replace --pull-model

  # Check status
  python ollama_stack.py status

  # Follow Open WebUI logs
  python ollama_stack.py logs --service open-webui -f

  # Download another model
  python ollama_stack.py pull --model mistral

  # Remove containers, network and volumes
  python ollama_stack.py uninstall --remove-network --remove-volumes
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # Install command
    install_parser = subparsers.add_parser('install', parents=[shared],
                                           help='Install Ollama and Open WebUI')
    install_parser.add_argument('-y', '--yes', action='store_true',
                                help='Answer yes to every question')
    replace_group = install_parser.add_mutually_exclusive_group()
    replace_group.add_argument('--replace', dest='replace', action='store_true', default=None,
                               help='Replace existing containers without asking')
    replace_group.add_argument('--keep', dest='replace', action='store_false', default=None,
                               help='Keep existing containers without asking')
    model_group = install_parser.add_mutually_exclusive_group()
    model_group.add_argument('--pull-model', dest='pull_model', action='store_true', default=None,
                             help='Download the default model without asking')
    model_group.add_argument('--skip-model', dest='pull_model', action='store_false', default=None,
                             help='Skip the default model download')

    subparsers.add_parser('status', parents=[shared], help='Check container status')
    subparsers.add_parser('start', parents=[shared], help='Start stopped containers')
    subparsers.add_parser('stop', parents=[shared], help='Stop the containers')

    # Logs command
    logs_parser = subparsers.add_parser('logs', parents=[shared], help='View container logs')
    logs_parser.add_argument('--service', required=True, choices=SERVICES)
    logs_parser.add_argument('-f', '--follow', action='store_true', help='Follow logs')

    subparsers.add_parser('pull', parents=[shared], help='Download a model into Ollama')
    subparsers.add_parser('models', parents=[shared], help='List downloaded models')

    # Uninstall command
    uninstall_parser = subparsers.add_parser('uninstall', parents=[shared],
                                             help='Remove the containers')
    uninstall_parser.add_argument('--remove-network', dest='remove_network', action='store_true',
                                  help='Also remove the network')
    uninstall_parser.add_argument('--remove-volumes', dest='remove_volumes', action='store_true',
                                  help='Also remove the data volumes (models, chats)')

    return parser


# ============================================================================
# Main CLI
# ============================================================================
def main(argv=None, runtime=None):
    """Main function to handle CLI arguments. Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    runtime = runtime or DockerRuntime(args.runtime_binary)

    if args.command == 'install':
        orchestrator = StackOrchestrator(config, runtime, build_decisions(args))
        return orchestrator.install()

    orchestrator = StackOrchestrator(config, runtime)

    if args.command == 'status':
        return 0 if orchestrator.status() else 1
    elif args.command == 'start':
        return 0 if orchestrator.start_all() else 1
    elif args.command == 'stop':
        orchestrator.stop_all()
    elif args.command == 'logs':
        orchestrator.logs(args.service, follow=args.follow)
    elif args.command == 'pull':
        return 0 if orchestrator.pull_model(args.model) else 1
    elif args.command == 'models':
        return 0 if orchestrator.list_models() else 1
    elif args.command == 'uninstall':
        orchestrator.uninstall(remove_network=args.remove_network,
                               remove_volumes=args.remove_volumes)
    return 0


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n⚠️  Operation interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n\n❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    run()
