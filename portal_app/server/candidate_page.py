"""Single-page HTML served to candidates by the FastAPI server."""

CANDIDATE_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>PortalQt Assessment</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; max-width: 52rem; margin-inline: auto; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.4); }
      .hidden { display: none; }
      label { display: block; margin-top: 0.75rem; }
      input[type=text], input[type=email], textarea { width: 100%; box-sizing: border-box; padding: 0.6rem; border-radius: 0.5rem; border: 1px solid #334155; background: #0b1120; color: #f5f7ff; font-size: 1rem; }
      .primary-button, .nav-button { border: none; border-radius: 0.75rem; padding: 0.75rem 1.25rem; font-size: 1rem; background: #1f9aa5; color: #fff; cursor: pointer; }
      .nav-button { background: #334155; }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      .header-row { display: flex; justify-content: space-between; align-items: center; gap: 1rem; }
      .badge { padding: 0.25rem 0.6rem; border-radius: 999px; background: #1e293b; margin-left: 0.4rem; }
      #timer { background: #b91c1c; }
      .option-item { display: block; padding: 0.6rem 0.8rem; border-radius: 0.5rem; margin-top: 0.5rem; background: #1e293b; cursor: pointer; }
      .option-item.selected { background: #1f9aa5; }
      .footer-row { display: flex; justify-content: space-between; margin-top: 1.25rem; gap: 0.5rem; }
      #form-status, #status { min-height: 1.25rem; color: #facc15; }
    </style>
  </head>
  <body>
    <section class="card" id="entry-card">
      <h1>Assessment</h1>
      <p>Enter your details to start the test. Switching tabs ends the test.</p>
      <label>Full Name *<input type="text" id="full-name" /></label>
      <label>Email Address *<input type="email" id="email" /></label>
      <p id="form-status"></p>
      <button id="start-button" class="primary-button">Start Test</button>
    </section>
    <section class="card hidden" id="message-card">
      <h2 id="message-title"></h2>
      <p id="message-text"></p>
      <p id="score-text"></p>
      <button id="home-button" class="primary-button">Back to Home</button>
    </section>
    <section class="card hidden" id="test-card">
      <div class="header-row">
        <div><strong id="candidate-name"></strong><br /><small id="candidate-email"></small></div>
        <div><span class="badge" id="progress"></span><span class="badge" id="timer"></span></div>
      </div>
      <h3 id="question-text"></h3>
      <div id="answer-area"></div>
      <p id="status"></p>
      <div class="footer-row">
        <div>
          <button id="prev-button" class="nav-button">Previous</button>
          <button id="next-button" class="nav-button">Next</button>
        </div>
        <button id="submit-button" class="primary-button">Submit Test</button>
      </div>
    </section>
    <script>
      const entryCard = document.getElementById('entry-card');
      const messageCard = document.getElementById('message-card');
      const testCard = document.getElementById('test-card');
      const answerArea = document.getElementById('answer-area');
      const statusEl = document.getElementById('status');
      const timerEl = document.getElementById('timer');

      const TITLES = {
        unavailable: 'Test Not Active',
        error: 'Error',
        abandoned: 'Test Ended',
        completed: 'Thank You for Completing the Test!',
        submit_failed: 'Result Not Saved',
      };

      let state = null;
      let pollHandle = null;
      let countdownHandle = null;
      let remaining = 0;
      let textTimer = null;

      function show(card) {
        for (const el of [entryCard, messageCard, testCard]) {
          el.classList.toggle('hidden', el !== card);
        }
      }

      function formatTime(seconds) {
        const m = Math.floor(seconds / 60);
        const s = String(seconds % 60).padStart(2, '0');
        return m + ':' + s;
      }

      async function call(method, path, body) {
        const response = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        let data = null;
        try { data = await response.json(); } catch (err) { data = null; }
        return { ok: response.ok, status: response.status, data };
      }

      function stopTimers() {
        if (pollHandle) { clearInterval(pollHandle); pollHandle = null; }
        if (countdownHandle) { clearInterval(countdownHandle); countdownHandle = null; }
      }

      function render(next) {
        state = next;
        if (state.phase !== 'active') {
          stopTimers();
          document.getElementById('message-title').textContent = TITLES[state.phase] || 'Please wait';
          document.getElementById('message-text').textContent = state.message || '';
          document.getElementById('score-text').textContent =
            state.score_percent !== null ? 'Score: ' + state.correct_answers + '/' + state.total_questions + ' (' + state.score_percent + '%)' : '';
          show(messageCard);
          return;
        }
        show(testCard);
        document.getElementById('candidate-name').textContent = 'Candidate: ' + state.candidate_name;
        document.getElementById('candidate-email').textContent = state.candidate_email;
        document.getElementById('progress').textContent = 'Q ' + (state.current_index + 1) + '/' + state.total_questions;
        remaining = state.remaining_seconds;
        timerEl.textContent = formatTime(remaining);
        document.getElementById('question-text').textContent = 'Q' + (state.current_index + 1) + ': ' + state.question.text;
        document.getElementById('prev-button').disabled = state.current_index === 0;
        document.getElementById('next-button').disabled = state.current_index === state.total_questions - 1;
        renderAnswer();
        startTimers();
      }

      function renderAnswer() {
        const question = state.question;
        const selected = state.current_response || '';
        if (answerArea.dataset.questionId === question.id && question.kind === 'free_text') {
          return;
        }
        answerArea.dataset.questionId = question.id;
        answerArea.innerHTML = '';
        if (question.kind === 'multiple_choice') {
          question.options.forEach((option) => {
            const label = document.createElement('label');
            label.className = 'option-item' + (selected === option ? ' selected' : '');
            const input = document.createElement('input');
            input.type = 'radio';
            input.name = 'question-' + question.id;
            input.checked = selected === option;
            input.addEventListener('change', () => sendAnswer(option));
            label.appendChild(input);
            label.appendChild(document.createTextNode(' ' + option));
            answerArea.appendChild(label);
          });
        } else {
          const area = document.createElement('textarea');
          area.rows = 5;
          area.placeholder = 'Type your answer...';
          area.value = selected;
          area.addEventListener('input', () => {
            clearTimeout(textTimer);
            textTimer = setTimeout(() => sendAnswer(area.value), 400);
          });
          answerArea.appendChild(area);
        }
      }

      function startTimers() {
        if (!countdownHandle) {
          countdownHandle = setInterval(() => {
            remaining = Math.max(0, remaining - 1);
            timerEl.textContent = formatTime(remaining);
            if (remaining === 0) { refresh(); }
          }, 1000);
        }
        if (!pollHandle) { pollHandle = setInterval(refresh, 5000); }
      }

      async function refresh() {
        const result = await call('GET', '/session');
        if (result.ok) { render(result.data); }
      }

      async function sendAnswer(value) {
        const result = await call('POST', '/session/answer', { response: value });
        if (result.ok) {
          const sameQuestion = result.data.question && state.question && result.data.question.id === state.question.id;
          if (!sameQuestion || result.data.question.kind !== 'free_text') { answerArea.dataset.questionId = ''; }
          render(result.data);
          statusEl.textContent = '';
        } else {
          statusEl.textContent = (result.data && result.data.detail) || 'Unable to save answer.';
        }
      }

      async function navigate(direction) {
        clearTimeout(textTimer);
        const area = answerArea.querySelector('textarea');
        if (area && area.value !== (state.current_response || '')) { await sendAnswer(area.value); }
        const result = await call('POST', '/session/navigate', { direction });
        if (result.ok) { answerArea.dataset.questionId = ''; render(result.data); }
      }

      async function submitTest(confirmed) {
        clearTimeout(textTimer);
        const area = answerArea.querySelector('textarea');
        if (area && area.value !== (state.current_response || '')) { await sendAnswer(area.value); }
        const result = await call('POST', '/session/submit', { confirmed });
        if (result.status === 409 && result.data && result.data.detail && result.data.detail.unanswered) {
          if (window.confirm('Some questions are unanswered. Submit anyway?')) { await submitTest(true); }
          return;
        }
        if (result.ok) { render(result.data); }
        else { statusEl.textContent = (result.data && result.data.detail) || 'Unable to submit.'; }
      }

      document.getElementById('start-button').addEventListener('click', async () => {
        const fullName = document.getElementById('full-name').value.trim();
        const email = document.getElementById('email').value.trim();
        const formStatus = document.getElementById('form-status');
        if (!fullName || !email) {
          formStatus.textContent = 'Please enter your full name and email.';
          return;
        }
        formStatus.textContent = 'Loading questions…';
        const result = await call('POST', '/session', { full_name: fullName, email });
        if (result.ok) {
          formStatus.textContent = '';
          answerArea.dataset.questionId = '';
          render(result.data);
        } else {
          formStatus.textContent = (result.data && result.data.detail) || 'Registration failed. Please try again later.';
        }
      });

      document.getElementById('prev-button').addEventListener('click', () => navigate('previous'));
      document.getElementById('next-button').addEventListener('click', () => navigate('next'));
      document.getElementById('submit-button').addEventListener('click', () => submitTest(false));
      document.getElementById('home-button').addEventListener('click', () => { show(entryCard); });

      document.addEventListener('visibilitychange', () => {
        if (document.hidden && state && state.phase === 'active') {
          const body = JSON.stringify({ hidden: true });
          navigator.sendBeacon('/session/visibility', new Blob([body], { type: 'application/json' }));
          stopTimers();
        }
      });

      call('GET', '/session').then((result) => {
        if (result.ok) { render(result.data); }
      });
    </script>
  </body>
</html>
"""
