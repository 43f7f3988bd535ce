"""
bizdesk 명령행 클라이언트

실행 방법:
    python -m client listen
    python -m client trial-balance --export csv
    python -m client reconcile 1 --select 10 11 --statement 1500.00
"""
