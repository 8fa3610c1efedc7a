# flu/cli/main.py
import argparse
import json
import logging
import sys
from typing import List, Optional

from ..config import ConfigManager
from ..core.logging_config import LoggingManager
from ..error_handlers import handle_exceptions
from ..models.assembly import AlignedAssembly
from ..models.segment import Segment
from ..services.assembly_validator import AssemblyValidator
from ..services.cleavage import CleavageSiteAnalyzer
from ..utils.fasta import read_assemblies, read_protein_sequences
from ..utils.reference_loader import load_references
from ..utils.report import assembly_table, protein_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Influenza segment assembly validation')

    # Global options
    parser.add_argument('--config', type=str, help='Path to configuration file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--log-file', type=str,
                        help='Log to file in addition to stderr')
    parser.add_argument('--log-dir', type=str,
                        help='Directory for log files')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    subparsers.required = True

    validate_parser = subparsers.add_parser('validate', help='Validate assemblies against references')
    validate_parser.add_argument('references', help='YAML reference catalogue')
    validate_parser.add_argument('assemblies', help='FASTA file of assembled segments')
    validate_parser.add_argument('--segment', type=str,
                                 help='Segment of every assembly (default: only reference)')
    validate_parser.add_argument('--json', action='store_true',
                                 help='Output results as JSON')
    validate_parser.add_argument('--summary', type=str,
                                 help='Write a per-assembly TSV summary')
    validate_parser.add_argument('--protein-summary', type=str,
                                 help='Write a per-protein TSV summary')

    cleavage_parser = subparsers.add_parser('cleavage', help='Classify HA0 cleavage sites')
    cleavage_parser.add_argument('proteins', help='FASTA file of HA protein sequences')
    cleavage_parser.add_argument('--json', action='store_true',
                                 help='Output results as JSON')

    return parser


def print_aligned_assembly(aligned: AlignedAssembly) -> None:
    identity = 'n/a' if aligned.identity is None else f"{aligned.identity * 100:.2f} %"
    print(f"{aligned.assembly.name}\t{aligned.reference.name}\tidentity {identity}")
    for error in aligned.errors:
        print(f"\t{error}")
    for protein in aligned.proteins:
        for error in protein.errors:
            print(f"\t{protein.variant}: {error}")


def run_validate(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    logger = logging.getLogger("flu.cli.validate")

    references = load_references(args.references)
    segment = Segment.parse(args.segment) if args.segment else None
    check_significance = bool(config_manager.get('validation.check_significance', True))
    assemblies = list(read_assemblies(args.assemblies, segment, check_significance))
    logger.info(f"Validating {len(assemblies)} assemblies against {len(references)} references")

    validator = AssemblyValidator.from_config(config_manager)
    results = list(validator.validate_many(assemblies, references))

    if args.json:
        print(json.dumps([aligned.to_dict() for aligned in results], indent=2))
    else:
        for aligned in results:
            print_aligned_assembly(aligned)

    if args.summary:
        assembly_table(results).to_csv(args.summary, sep='\t', index=False)
        logger.info(f"Wrote assembly summary to {args.summary}")
    if args.protein_summary:
        protein_table(results).to_csv(args.protein_summary, sep='\t', index=False)
        logger.info(f"Wrote protein summary to {args.protein_summary}")

    n_failed = sum(1 for aligned in results if aligned.all_errors)
    logger.info(f"{n_failed} of {len(results)} assemblies have errors")
    return 0


def run_cleavage(args: argparse.Namespace) -> int:
    analyzer = CleavageSiteAnalyzer()
    records = []
    for name, protein in read_protein_sequences(args.proteins):
        site = analyzer.analyze(protein)
        records.append({
            'name': name,
            'motif': site.motif,
            'pathogenicity': None if site.pathogenicity is None else site.pathogenicity.value,
        })

    if args.json:
        print(json.dumps(records, indent=2))
    else:
        for record in records:
            if record['motif'] is None:
                print(f"{record['name']}\tno cleavage site found")
            else:
                print(f"{record['name']}\t{record['motif']}\t{record['pathogenicity']}")
    return 0


@handle_exceptions()
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)

    logger = LoggingManager.configure(
        verbose=args.verbose,
        log_file=args.log_file,
        log_dir=args.log_dir,
        component="flu",
        config=config_manager.config
    )
    logger.debug(f"Running command {args.command}")

    if args.command == 'validate':
        return run_validate(args, config_manager)
    return run_cleavage(args)


if __name__ == "__main__":
    sys.exit(main())
