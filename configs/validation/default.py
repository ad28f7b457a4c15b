validator = dict(
    type="SnapshotValidator",
    epsilon=0.05,
    max_spacing=5.0,
    max_deviation=0.05,
    ground_truth=True,
    checks=[
        dict(type="DuplicateIdentifierCheck"),
        dict(type="MalformedShapeCheck"),
        dict(type="DanglingReferenceCheck"),
        dict(type="SuccessorEndpointCheck"),
        dict(type="SuccessionSymmetryCheck"),
        dict(type="AdjacencySymmetryCheck"),
        dict(type="SamplingToleranceCheck"),
        dict(type="UnknownEnumCheck"),
    ],
    post_hooks=[dict(type="ViolationSummaryHook", verbose=True)],
)
