from infill_eval.cli import main

main()
