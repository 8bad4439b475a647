import logging
import sys


def main() -> None:
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    from .analysis import alpha_sweep, counterfactual
    from .cli import parse_args
    from .config import merge_config
    from .dataset import load_dataset
    from .engine import AttributionEngine
    from .errors import CreditGraphError
    from .logger import setup_logging
    from .writer import build_rows, build_sweep_rows, results_to_string, write_string_to_file

    try:
        args = parse_args()
        setup_logging(args.verbosity)

        dataset = load_dataset(args.dataset)
        config = merge_config({"alpha": args.alpha, "damping": args.damping}, base=dataset.config)

        if args.sweep is not None:
            rows = build_sweep_rows(alpha_sweep(dataset.nodes, dataset.edges, args.sweep, config, args.pool))
        elif args.exclude:
            result = counterfactual(dataset.nodes, dataset.edges, args.exclude, config, args.pool)
            delta = result.delta
            rows = [
                {"agent": agent, "reward": result.baseline.get(agent, 0.0), "without": result.without.get(agent, 0.0), "delta": d}
                for agent, d in sorted(delta.items(), key=lambda item: (-abs(item[1]), item[0]))
            ]
        else:
            engine = AttributionEngine(config)
            scores = engine.evaluate(dataset.nodes, dataset.edges)
            rows = build_rows(scores, engine.reward(scores, args.pool))

        output_content = results_to_string(rows, args.output_format)
        write_string_to_file(output_content, args.output_file, args.output_format)
        if args.output_file:
            print(f"Saved to {args.output_file}", file=sys.stderr)

    except CreditGraphError as e:
        logging.debug("Attribution failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)
    except BrokenPipeError:
        sys.stderr.close()
        sys.exit(141)


if __name__ == "__main__":
    main()
